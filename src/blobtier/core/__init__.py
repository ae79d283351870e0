"""Core domain for blobtier."""

from .config import BlobTierConfig, RemoteProfile, load_profile
from .errors import (
    BlobTierError,
    ConfigError,
    IntegrityMismatchError,
    NotFoundError,
    RemoteStoreError,
    SyncAbortedError,
    WalkCancelledError,
)
from .models import (
    LoadResult,
    LoadSource,
    PutStatus,
    StoreSummary,
    SyncReport,
    SyncResult,
    WalkEntry,
    is_valid_fingerprint,
)
from .service import BlobService
from .sync import SyncService

__all__ = [
    "BlobService",
    "BlobTierConfig",
    "BlobTierError",
    "ConfigError",
    "IntegrityMismatchError",
    "LoadResult",
    "LoadSource",
    "NotFoundError",
    "PutStatus",
    "RemoteProfile",
    "RemoteStoreError",
    "StoreSummary",
    "SyncAbortedError",
    "SyncReport",
    "SyncResult",
    "SyncService",
    "WalkCancelledError",
    "WalkEntry",
    "is_valid_fingerprint",
    "load_profile",
]
