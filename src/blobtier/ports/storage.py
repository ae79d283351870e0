"""Storage port interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..core.models import PutStatus


class StoragePort(Protocol):
    """Port for remote object store operations."""

    def put_if_absent(self, key: str, data: bytes) -> PutStatus:
        """Upload object unless the key already exists."""
        ...

    def get(self, key: str) -> bytes:
        """Fetch object. Raises NotFoundError when absent."""
        ...
