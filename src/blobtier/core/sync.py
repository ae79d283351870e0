"""Bulk synchronization of the local cache to the remote tier."""

import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

from ..ports import CachePort, HashPort, LoggerPort, StoragePort
from .errors import SyncAbortedError, WalkCancelledError
from .models import PutStatus, SyncReport, SyncResult, WalkEntry

# Queue marker for "no more items"
_END: Any = object()

# How often blocked queue operations re-check the cancellation signal
POLL_INTERVAL = 0.05


def _offer(q: queue.Queue, item: Any, done: threading.Event) -> bool:
    """Put item on q, giving up once done is set. Returns False if cancelled."""
    while not done.is_set():
        try:
            q.put(item, timeout=POLL_INTERVAL)
            return True
        except queue.Full:
            continue
    return False


def _take(q: queue.Queue, done: threading.Event) -> Any:
    """Get the next item from q, or _END once done is set."""
    while not done.is_set():
        try:
            return q.get(timeout=POLL_INTERVAL)
        except queue.Empty:
            continue
    return _END


class SyncService:
    """Push every cached object to the remote store.

    ``upload`` runs a walker thread feeding a bounded pool of workers, with
    results collected on the calling thread. ``upload_sequential`` does the
    same work inline.

    Per-object failures are recorded in the returned report and never stop
    sibling uploads. Only a failure of the traversal itself fails the run.
    """

    def __init__(
        self,
        cache: CachePort,
        storage: StoragePort,
        hasher: HashPort,
        logger: LoggerPort,
        parallel: int = 1,
    ):
        if parallel < 1:
            raise ValueError(f"parallel must be at least 1, got {parallel}")
        self.cache = cache
        self.storage = storage
        self.hasher = hasher
        self.logger = logger
        self.parallel = parallel

    def upload(self) -> SyncReport:
        """Upload the whole cache with ``parallel`` workers.

        Raises:
            SyncAbortedError: If the cache traversal failed. Objects handed to
                workers before the failure are still uploaded and reported.
        """
        start_time = time.perf_counter()
        report = SyncReport()
        self.logger.info("Starting upload", parallel=self.parallel)

        done = threading.Event()
        paths: queue.Queue = queue.Queue(maxsize=self.parallel)
        # Unbounded: the end marker may be posted from the calling thread when a
        # worker finishes before its callback is registered
        results: queue.Queue = queue.Queue()

        workers: list[Future] = []
        remaining = self.parallel
        lock = threading.Lock()

        def worker_finished(_: Future) -> None:
            nonlocal remaining
            with lock:
                remaining -= 1
                last = remaining == 0
            if last:
                _offer(results, _END, done)

        with ThreadPoolExecutor(
            max_workers=self.parallel + 1, thread_name_prefix="blobtier-sync"
        ) as executor:
            try:
                walker = executor.submit(self._walk, paths, done, report)
                for _ in range(self.parallel):
                    future = executor.submit(self._work, paths, results, done)
                    future.add_done_callback(worker_finished)
                    workers.append(future)

                while True:
                    result = results.get()
                    if result is _END:
                        break
                    self._record(result, report)
            finally:
                # Release the walker and any worker blocked on a hand-off
                done.set()

        for future in workers:
            future.result()

        report.duration = time.perf_counter() - start_time
        walk_error = walker.exception()
        if walk_error is not None:
            self.logger.error("Cache walk failed", error=str(walk_error))
            self._log_summary(report)
            raise SyncAbortedError(f"Cache walk failed: {walk_error}", report) from walk_error

        self._log_summary(report)
        return report

    def upload_sequential(self) -> SyncReport:
        """Upload the whole cache one object at a time on the calling thread."""
        start_time = time.perf_counter()
        report = SyncReport()
        self.logger.info("Starting sequential upload")

        try:
            for entry in self.cache.walk():
                if entry.skipped:
                    self._skip(entry, report)
                    continue
                try:
                    data = entry.path.read_bytes()
                except OSError as e:
                    self._skip(WalkEntry(path=entry.path, error=str(e)), report)
                    continue
                self._record(self._upload_data(entry.path, data), report)
        except Exception as e:
            report.duration = time.perf_counter() - start_time
            self.logger.error("Cache walk failed", error=str(e))
            self._log_summary(report)
            raise SyncAbortedError(f"Cache walk failed: {e}", report) from e

        report.duration = time.perf_counter() - start_time
        self._log_summary(report)
        return report

    def _walk(self, paths: queue.Queue, done: threading.Event, report: SyncReport) -> None:
        try:
            for entry in self.cache.walk():
                if entry.skipped:
                    self._skip(entry, report)
                    continue
                if not _offer(paths, entry.path, done):
                    raise WalkCancelledError("walk canceled")
        finally:
            for _ in range(self.parallel):
                if not _offer(paths, _END, done):
                    break

    def _work(self, paths: queue.Queue, results: queue.Queue, done: threading.Event) -> None:
        while True:
            path = _take(paths, done)
            if path is _END:
                return
            if not _offer(results, self._sync_one(path), done):
                return

    def _sync_one(self, path: Path) -> SyncResult:
        """Digest one cached file and upload it under its recomputed fingerprint."""
        try:
            data = path.read_bytes()
        except OSError as e:
            return SyncResult(path=path, error=e)
        return self._upload_data(path, data)

    def _upload_data(self, path: Path, data: bytes) -> SyncResult:
        fingerprint = self.hasher.digest(data)
        named = self.cache.fingerprint_for(path)
        if named is not None and named != fingerprint:
            self.logger.warning(
                "Cached content does not match its name, uploading under content hash",
                path=str(path),
                named=named,
                actual=fingerprint,
            )

        try:
            status = self.storage.put_if_absent(fingerprint, data)
        except Exception as e:
            return SyncResult(path=path, fingerprint=fingerprint, error=e)
        return SyncResult(path=path, fingerprint=fingerprint, status=status)

    def _skip(self, entry: WalkEntry, report: SyncReport) -> None:
        self.logger.warning("Skip", path=str(entry.path), error=entry.error)
        report.skipped.append(entry)

    def _record(self, result: SyncResult, report: SyncReport) -> None:
        report.results.append(result)
        if result.error is not None:
            self.logger.error(
                "Upload failed",
                path=str(result.path),
                key=result.fingerprint or "-",
                error=str(result.error),
            )
        elif result.status is PutStatus.EXISTS:
            self.logger.info("Already exists in remote", key=result.fingerprint)
        else:
            self.logger.info("Uploaded", key=result.fingerprint, path=str(result.path))

    def _log_summary(self, report: SyncReport) -> None:
        self.logger.info(
            "Upload finished",
            uploaded=report.uploaded,
            existing=report.existing,
            failed=len(report.failed),
            skipped=len(report.skipped),
            duration=f"{report.duration:.3f}s",
        )
