"""Port interfaces."""

from .cache import CachePort
from .hash import HashPort
from .logger import LoggerPort
from .storage import StoragePort

__all__ = ["CachePort", "HashPort", "LoggerPort", "StoragePort"]
