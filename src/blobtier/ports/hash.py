"""Hash port interface."""

from typing import Protocol


class HashPort(Protocol):
    """Port for content fingerprinting."""

    def digest(self, data: bytes) -> str:
        """Compute hex fingerprint of data."""
        ...
