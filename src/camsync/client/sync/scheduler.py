"""Poll scheduler for repeated sync passes.

This module provides:
- PollScheduler: Runs the sync engine once, or forever with a fixed pause
  between passes
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from camsync.client.sync.types import SyncError

if TYPE_CHECKING:
    from camsync.client.sync.engine import SyncEngine
    from camsync.client.sync.types import PassCallback, SyncResult
    from camsync.core.config import SyncConfig

logger = logging.getLogger(__name__)


class PollScheduler:
    """Runs sync passes according to the configured poll interval.

    With ``poll_seconds == 0`` a single pass is run and its errors
    propagate. Otherwise passes repeat forever, sleeping ``poll_seconds``
    after each one whatever its outcome.
    """

    def __init__(
        self,
        config: SyncConfig,
        engine: SyncEngine,
        on_pass: PassCallback | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            config: Sync configuration.
            engine: Engine running each pass.
            on_pass: Optional callback receiving each successful pass result.
        """
        self._config = config
        self._engine = engine
        self._on_pass = on_pass
        self._passes = 0

    @property
    def passes(self) -> int:
        """Get the number of passes started so far."""
        return self._passes

    def run_pass(self) -> SyncResult:
        """Run one pass and report it.

        Raises:
            EnumerationError: If the media list could not be fetched.
        """
        self._passes += 1
        result = self._engine.run_once()
        if self._on_pass:
            self._on_pass(result)
        return result

    def wait(self) -> None:
        """Sleep for the poll interval."""
        logger.debug(f"Sleeping {self._config.poll_seconds}s until next pass")
        time.sleep(self._config.poll_seconds)

    def run(self, max_passes: int | None = None) -> SyncResult | None:
        """Run passes until done.

        Args:
            max_passes: Stop polling after this many passes. None polls
                until interrupted.

        Returns:
            The last successful pass result, or None if none succeeded.

        Raises:
            EnumerationError: In run-once mode, if the pass failed.
        """
        if self._config.run_once:
            return self.run_pass()

        logger.info(f"Polling every {self._config.poll_seconds}s")
        last: SyncResult | None = None
        while max_passes is None or self._passes < max_passes:
            try:
                last = self.run_pass()
            except SyncError as e:
                logger.error(f"Sync pass failed: {e}")
            except Exception:
                logger.exception("Unexpected error during sync pass")

            if max_passes is not None and self._passes >= max_passes:
                break
            self.wait()
        return last
