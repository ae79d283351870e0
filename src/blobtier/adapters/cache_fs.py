"""Filesystem cache adapter."""

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from ..core.errors import NotFoundError
from ..core.models import WalkEntry, is_valid_fingerprint


class FsCacheAdapter:
    """Filesystem implementation of CachePort.

    Objects live under ``data_dir`` in two levels of shard directories taken
    from the first four characters of the fingerprint::

        data/2a/ae/6c35c94fcfb415dbe95f408b9ce91ee846ed
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir

    def cache_path(self, fingerprint: str) -> tuple[Path, str]:
        """Get (shard directory, file name) for a fingerprint."""
        if not is_valid_fingerprint(fingerprint):
            raise ValueError(f"Invalid fingerprint: {fingerprint!r}")
        return self.data_dir / fingerprint[0:2] / fingerprint[2:4], fingerprint[4:]

    def object_path(self, fingerprint: str) -> Path:
        dirpath, filename = self.cache_path(fingerprint)
        return dirpath / filename

    def put(self, fingerprint: str, data: bytes) -> bool:
        """Write object unless already cached.

        An existing file is never overwritten: the path is derived from the
        content, so whatever is there already holds the same bytes.
        """
        dirpath, filename = self.cache_path(fingerprint)
        path = dirpath / filename
        if path.exists():
            return False

        dirpath.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{filename[:8]}.", suffix=".tmp", dir=dirpath)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return True

    def get(self, fingerprint: str) -> bytes:
        path = self.object_path(fingerprint)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"Object not cached: {fingerprint}") from e

    def walk(self) -> Iterator[WalkEntry]:
        """Yield every cached object, depth first in name order.

        Directories or entries that cannot be read are yielded as skipped
        entries instead of stopping the traversal. Hidden files (in-flight
        temporary writes) are ignored.
        """
        if not self.data_dir.is_dir():
            return

        stack = [self.data_dir]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                yield WalkEntry(path=current, error=str(e))
                continue

            subdirs = []
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(Path(entry.path))
                    elif entry.is_file(follow_symlinks=False):
                        yield WalkEntry(path=Path(entry.path))
                except OSError as e:
                    yield WalkEntry(path=Path(entry.path), error=str(e))
            stack.extend(reversed(subdirs))

    def fingerprint_for(self, path: Path) -> str | None:
        try:
            parts = path.relative_to(self.data_dir).parts
        except ValueError:
            return None
        if len(parts) != 3:
            return None
        candidate = "".join(parts)
        return candidate if is_valid_fingerprint(candidate) else None
