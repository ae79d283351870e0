"""Adapter implementations."""

from .cache_fs import FsCacheAdapter
from .hash_sha1 import Sha1Adapter
from .logger_std import StdLoggerAdapter
from .storage_s3 import S3StorageAdapter

__all__ = [
    "FsCacheAdapter",
    "S3StorageAdapter",
    "Sha1Adapter",
    "StdLoggerAdapter",
]
