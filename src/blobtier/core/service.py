"""Core BlobService orchestration."""

import time

from ..ports import CachePort, HashPort, LoggerPort, StoragePort
from .errors import IntegrityMismatchError, NotFoundError
from .models import LoadResult, LoadSource, StoreSummary, is_valid_fingerprint


class BlobService:
    """Single-object store/load across the cache and remote tiers."""

    def __init__(
        self,
        cache: CachePort,
        hasher: HashPort,
        logger: LoggerPort,
        storage: StoragePort | None = None,
    ):
        """Initialize service with ports.

        Args:
            storage: Remote tier. None runs in local-only mode.
        """
        self.cache = cache
        self.hasher = hasher
        self.logger = logger
        self.storage = storage

    @property
    def local_only(self) -> bool:
        return self.storage is None

    def store(self, data: bytes) -> StoreSummary:
        """Write content to the cache, then to the remote tier.

        A failed remote upload leaves the cache entry in place.
        """
        start_time = time.perf_counter()
        fingerprint = self.hasher.digest(data)

        cached = self.cache.put(fingerprint, data)
        if not cached:
            self.logger.debug("Already cached", key=fingerprint)

        summary = StoreSummary(fingerprint=fingerprint, size=len(data), cached=cached)
        if self.storage is not None:
            summary.remote = self.storage.put_if_absent(fingerprint, data)
            self.logger.info("Stored remotely", key=fingerprint, status=summary.remote.value)

        self.logger.log_operation(
            op="store",
            key=fingerprint,
            sizes={"file": len(data)},
            durations={"total": time.perf_counter() - start_time},
            cached=cached,
        )
        return summary

    def load(self, request: bytes) -> LoadResult:
        """Resolve a fingerprint to its content.

        Input that is not a well-formed fingerprint is returned untouched.
        A cache miss falls back to the remote tier and fills the cache.
        """
        try:
            fingerprint = request.decode("ascii")
        except UnicodeDecodeError:
            fingerprint = ""
        if not is_valid_fingerprint(fingerprint):
            self.logger.debug("Not a fingerprint, passing through", size=len(request))
            return LoadResult(content=request, source=LoadSource.PASSTHROUGH)

        start_time = time.perf_counter()
        try:
            content = self.cache.get(fingerprint)
            source = LoadSource.CACHE
        except NotFoundError:
            if self.storage is None:
                raise
            content = self._fetch_remote(self.storage, fingerprint)
            source = LoadSource.REMOTE

        self.logger.log_operation(
            op="load",
            key=fingerprint,
            sizes={"file": len(content)},
            durations={"total": time.perf_counter() - start_time},
            cache_hit=source is LoadSource.CACHE,
        )
        return LoadResult(content=content, source=source, fingerprint=fingerprint)

    def _fetch_remote(self, storage: StoragePort, fingerprint: str) -> bytes:
        self.logger.info("Cache miss, fetching from remote", key=fingerprint)
        content = storage.get(fingerprint)

        actual = self.hasher.digest(content)
        if actual != fingerprint:
            raise IntegrityMismatchError(
                f"SHA1 mismatch: expected {fingerprint}, got {actual}"
            )

        self.cache.put(fingerprint, content)
        self.logger.debug("Cached remote object", path=str(self.cache.object_path(fingerprint)))
        return content
