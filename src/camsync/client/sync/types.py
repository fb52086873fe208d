"""Shared types and dataclasses for sync operations.

This module provides:
- SyncError, EnumerationError, TransferError: Exception classes
- TransferTask: A resolved remote URL -> local path pair
- FetchOutcome, FetchResult: Result of a single fetch
- SyncResult: Overall result of one sync pass
- Type aliases for callbacks
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SyncError(Exception):
    """Base exception for sync errors."""


class EnumerationError(SyncError):
    """The camera's media list could not be fetched. Aborts the pass."""


class TransferError(SyncError):
    """A single file could not be fetched.

    Attributes:
        url: Remote URL being fetched.
        local_path: Destination path.
    """

    def __init__(self, message: str, url: str, local_path: Path | str) -> None:
        self.url = url
        self.local_path = Path(local_path)
        super().__init__(message)


@dataclass(frozen=True)
class TransferTask:
    """A remote file and where it should land locally."""

    url: str
    local_path: Path


class FetchOutcome(str, Enum):
    """What a fetch did."""

    NOOP = "noop"  # url or path empty
    SKIPPED = "skipped"
    DOWNLOADED = "downloaded"


@dataclass
class FetchResult:
    """Result of a single fetch."""

    url: str
    local_path: Path | None
    outcome: FetchOutcome
    size: int | None = None
    elapsed: float = 0.0


@dataclass
class SyncResult:
    """Result of one sync pass."""

    listed: int = 0
    downloaded: list[FetchResult] = field(default_factory=list)
    skipped: list[FetchResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        """Get bytes downloaded during the pass."""
        return sum(r.size or 0 for r in self.downloaded)

    def record(self, result: FetchResult) -> None:
        """Add a fetch result to the matching bucket."""
        if result.outcome == FetchOutcome.DOWNLOADED:
            self.downloaded.append(result)
        elif result.outcome == FetchOutcome.SKIPPED:
            self.skipped.append(result)


# Type alias for per-pass callback
PassCallback = Callable[[SyncResult], None]
