"""Core domain models."""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

FINGERPRINT_LENGTH = 40
_FINGERPRINT_RE = re.compile(rf"[0-9a-f]{{{FINGERPRINT_LENGTH}}}")


def is_valid_fingerprint(value: str) -> bool:
    """Check for exactly 40 lowercase hex characters.

    Nothing is stripped, so surrounding whitespace makes the value invalid.
    """
    return _FINGERPRINT_RE.fullmatch(value) is not None


class PutStatus(Enum):
    """Outcome of a remote put."""

    UPLOADED = "uploaded"
    EXISTS = "exists"


class LoadSource(Enum):
    """Where the bytes returned by a load came from."""

    PASSTHROUGH = "passthrough"
    CACHE = "cache"
    REMOTE = "remote"


@dataclass(frozen=True)
class WalkEntry:
    """One entry of a cache traversal.

    ``error`` is set when the entry could not be read and was skipped.
    """

    path: Path
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


@dataclass
class StoreSummary:
    """Summary of a store operation."""

    fingerprint: str
    size: int
    cached: bool
    remote: PutStatus | None = None


@dataclass
class LoadResult:
    """Bytes returned by a load and their origin."""

    content: bytes
    source: LoadSource
    fingerprint: str | None = None


@dataclass
class SyncResult:
    """Per-object outcome of a bulk synchronization."""

    path: Path
    fingerprint: str = ""
    status: PutStatus | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SyncReport:
    """Aggregated outcome of a bulk synchronization run."""

    results: list[SyncResult] = field(default_factory=list)
    skipped: list[WalkEntry] = field(default_factory=list)
    duration: float = 0.0

    @property
    def uploaded(self) -> int:
        return sum(1 for r in self.results if r.status is PutStatus.UPLOADED)

    @property
    def existing(self) -> int:
        return sum(1 for r in self.results if r.status is PutStatus.EXISTS)

    @property
    def failed(self) -> list[SyncResult]:
        return [r for r in self.results if not r.ok]
