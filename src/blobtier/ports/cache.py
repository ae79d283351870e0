"""Cache port interface."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..core.models import WalkEntry


class CachePort(Protocol):
    """Port for local cache operations."""

    def object_path(self, fingerprint: str) -> Path:
        """Get path where an object is cached."""
        ...

    def put(self, fingerprint: str, data: bytes) -> bool:
        """Cache object unless present. Returns True if written."""
        ...

    def get(self, fingerprint: str) -> bytes:
        """Read cached object. Raises NotFoundError when absent."""
        ...

    def walk(self) -> Iterator[WalkEntry]:
        """Traverse every cached object."""
        ...

    def fingerprint_for(self, path: Path) -> str | None:
        """Fingerprint encoded by a cache path, if it is one."""
        ...
