import pytest

from blobtier.adapters import FsCacheAdapter, Sha1Adapter
from blobtier.core import BlobService
from tests.tools import MemoryStorage, RecordingLogger


@pytest.fixture
def asset_dir(tmp_path):
    return tmp_path / "assets"


@pytest.fixture
def cache(asset_dir):
    return FsCacheAdapter(asset_dir / "data")


@pytest.fixture
def hasher():
    return Sha1Adapter()


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def service(cache, hasher, logger, storage):
    return BlobService(cache=cache, hasher=hasher, logger=logger, storage=storage)


@pytest.fixture
def local_service(cache, hasher, logger):
    return BlobService(cache=cache, hasher=hasher, logger=logger)
