"""SHA-1 fingerprint adapter."""

import hashlib


class Sha1Adapter:
    """SHA-1 implementation of HashPort."""

    def digest(self, data: bytes) -> str:
        """Compute SHA-1 hex digest of data."""
        return hashlib.sha1(data).hexdigest()
