import threading
import time
from typing import Any

from blobtier.core import NotFoundError, PutStatus, RemoteStoreError

HELLO = b"hello world"
HELLO_SHA1 = "2aae6c35c94fcfb415dbe95f408b9ce91ee846ed"


class MemoryStorage:
    """In-memory StoragePort used in place of S3."""

    def __init__(self, delay: float = 0.0):
        self.objects: dict[str, bytes] = {}
        self.failing: set[str] = set()
        self.delay = delay
        self.puts = 0
        self._lock = threading.Lock()

    def put_if_absent(self, key: str, data: bytes) -> PutStatus:
        if self.delay:
            time.sleep(self.delay)
        if key in self.failing:
            raise RemoteStoreError(f"simulated failure for {key}")
        with self._lock:
            if key in self.objects:
                return PutStatus.EXISTS
            self.objects[key] = data
            self.puts += 1
        return PutStatus.UPLOADED

    def get(self, key: str) -> bytes:
        if key in self.failing:
            raise RemoteStoreError(f"simulated failure for {key}")
        try:
            return self.objects[key]
        except KeyError:
            raise NotFoundError(f"Object not found: {key}") from None


class RecordingLogger:
    """LoggerPort that keeps records in memory."""

    def __init__(self):
        self.records: list[tuple[str, str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def _add(self, level: str, message: str, fields: dict[str, Any]) -> None:
        with self._lock:
            self.records.append((level, message, fields))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._add("debug", message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._add("info", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._add("warning", message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._add("error", message, kwargs)

    def log_operation(self, op: str, key: str, sizes=None, durations=None, **kwargs: Any) -> None:
        self._add("info", "Operation complete", {"op": op, "key": key, **kwargs})

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]
