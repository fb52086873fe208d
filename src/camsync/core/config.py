"""Shared configuration classes for camsync.

This module defines the immutable configuration handed to the sync engine,
the media enumerator and the poll scheduler.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT = 30.0
DEFAULT_POLL_SECONDS = 60


@dataclass(frozen=True)
class SyncConfig:
    """Configuration for mirroring one camera.

    Attributes:
        host: Camera address (e.g., "192.168.0.1" or "http://virb.local").
        output_dir: Local directory downloaded files are written into.
        mirror: If True, copy every file the camera references and keep its
            directory layout. Otherwise only the primary file is copied and
            written out under its logical name.
        poll_seconds: Seconds to wait between passes. 0 means run once.
        delete_percent: Reserved disk usage threshold for deleting old
            media. Validated but not acted upon.
        timeout: Request/connection timeout in seconds.
        media_path: Optional path filter passed to the media listing.
    """

    host: str
    output_dir: Path
    mirror: bool = False
    poll_seconds: int = 0
    delete_percent: int = 0
    timeout: float = DEFAULT_TIMEOUT
    media_path: str = ""

    def __post_init__(self) -> None:
        """Normalize and validate fields."""
        host = self.host.strip().rstrip("/")
        if not host:
            raise ValueError("host must not be empty")
        if self.poll_seconds < 0:
            raise ValueError(f"poll_seconds must be >= 0, got {self.poll_seconds}")
        if not 0 <= self.delete_percent <= 100:
            raise ValueError(
                f"delete_percent must be between 0 and 100, got {self.delete_percent}"
            )
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        # Frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, "host", host)
        object.__setattr__(self, "output_dir", Path(self.output_dir))

    @property
    def base_url(self) -> str:
        """Get the HTTP base URL of the camera.

        Returns:
            Host with an http:// scheme added when none was given.
        """
        if self.host.startswith(("http://", "https://")):
            return self.host
        return f"http://{self.host}"

    @property
    def api_url(self) -> str:
        """Get the URL of the camera's JSON command endpoint."""
        return f"{self.base_url}/virb"

    @property
    def run_once(self) -> bool:
        """Check if the scheduler should stop after a single pass."""
        return self.poll_seconds == 0
