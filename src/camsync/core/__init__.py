"""Core module - Shared configuration."""

from camsync.core.config import DEFAULT_POLL_SECONDS, DEFAULT_TIMEOUT, SyncConfig

__all__ = [
    "DEFAULT_POLL_SECONDS",
    "DEFAULT_TIMEOUT",
    "SyncConfig",
]
