"""Core domain errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import SyncReport


class BlobTierError(Exception):
    """Base error for blobtier."""


class ConfigError(BlobTierError):
    """Configuration file, profile or credential problem."""


class NotFoundError(BlobTierError):
    """Object not found in the requested tier."""


class RemoteStoreError(BlobTierError):
    """Remote object store failed for a reason other than a missing key."""


class IntegrityMismatchError(BlobTierError):
    """Fetched content does not hash to its fingerprint."""


class WalkCancelledError(BlobTierError):
    """Cache traversal stopped because the pipeline was cancelled."""


class SyncAbortedError(BlobTierError):
    """Bulk synchronization failed at the traversal level.

    The partial report is attached so callers can still inspect the objects
    that were handled before the failure.
    """

    def __init__(self, message: str, report: SyncReport):
        super().__init__(message)
        self.report = report
