import pytest

from blobtier.adapters import FsCacheAdapter
from blobtier.core import (
    BlobService,
    IntegrityMismatchError,
    LoadSource,
    NotFoundError,
    PutStatus,
    RemoteStoreError,
)
from tests.tools import HELLO, HELLO_SHA1


def test_store_local_only(local_service, asset_dir):
    summary = local_service.store(HELLO)
    assert summary.fingerprint == HELLO_SHA1
    assert summary.size == 11
    assert summary.cached is True
    assert summary.remote is None
    assert (asset_dir / "data" / "2a" / "ae" / "6c35c94fcfb415dbe95f408b9ce91ee846ed").read_bytes() == HELLO


def test_store_writes_both_tiers(service, storage, cache):
    summary = service.store(HELLO)
    assert summary.remote is PutStatus.UPLOADED
    assert storage.objects == {HELLO_SHA1: HELLO}
    assert cache.get(HELLO_SHA1) == HELLO


def test_store_twice_is_idempotent(service, storage):
    service.store(HELLO)
    summary = service.store(HELLO)
    assert summary.cached is False
    assert summary.remote is PutStatus.EXISTS
    assert storage.puts == 1


def test_store_remote_failure_keeps_cache_entry(service, storage, cache):
    storage.failing.add(HELLO_SHA1)
    with pytest.raises(RemoteStoreError):
        service.store(HELLO)
    assert cache.get(HELLO_SHA1) == HELLO


def test_store_empty_input(local_service):
    assert local_service.store(b"").fingerprint == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


@pytest.mark.parametrize(
    "request_bytes",
    [
        b"",
        b"plain file contents\n",
        HELLO_SHA1.encode() + b"\n",
        HELLO_SHA1.upper().encode(),
        HELLO_SHA1[:39].encode(),
        b"\xff" * 40,
    ],
)
def test_load_passes_through_non_fingerprints(service, request_bytes):
    result = service.load(request_bytes)
    assert result.source is LoadSource.PASSTHROUGH
    assert result.content == request_bytes


def test_round_trip_from_cache(service):
    data = bytes(range(256)) * 4
    fingerprint = service.store(data).fingerprint
    result = service.load(fingerprint.encode())
    assert result.content == data
    assert result.source is LoadSource.CACHE


def test_round_trip_from_cold_cache(service, storage, hasher, logger, tmp_path):
    data = b"remote content"
    fingerprint = service.store(data).fingerprint

    cold = BlobService(
        cache=FsCacheAdapter(tmp_path / "cold" / "data"),
        hasher=hasher,
        logger=logger,
        storage=storage,
    )
    result = cold.load(fingerprint.encode())
    assert result.content == data
    assert result.source is LoadSource.REMOTE


def test_load_fills_cache(service, storage, cache, hasher, logger):
    data = b"only in remote"
    fingerprint = hasher.digest(data)
    storage.objects[fingerprint] = data

    assert service.load(fingerprint.encode()).source is LoadSource.REMOTE
    assert cache.get(fingerprint) == data

    # Second load with the remote tier disabled is served locally
    offline = BlobService(cache=cache, hasher=hasher, logger=logger)
    result = offline.load(fingerprint.encode())
    assert result.content == data
    assert result.source is LoadSource.CACHE


def test_load_missing_everywhere(service):
    with pytest.raises(NotFoundError):
        service.load(HELLO_SHA1.encode())


def test_load_local_only_miss(local_service):
    with pytest.raises(NotFoundError):
        local_service.load(HELLO_SHA1.encode())


def test_load_remote_error_is_fatal(service, storage):
    storage.failing.add(HELLO_SHA1)
    with pytest.raises(RemoteStoreError):
        service.load(HELLO_SHA1.encode())


def test_load_rejects_corrupt_remote_object(service, storage, cache):
    storage.objects[HELLO_SHA1] = b"tampered"
    with pytest.raises(IntegrityMismatchError):
        service.load(HELLO_SHA1.encode())
    assert not cache.object_path(HELLO_SHA1).exists()
