"""Sync engine mirroring a camera's media to local storage.

This module provides:
- SyncEngine: Runs one pass over the camera's media list
- plan_tasks: Resolves a media descriptor into transfer tasks

Each pass re-reads the media list and compares against what is on disk.
No state is kept between passes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from camsync.client.api import APIError
from camsync.client.sync.paths import PathMapper
from camsync.client.sync.types import (
    EnumerationError,
    SyncResult,
    TransferError,
    TransferTask,
)

if TYPE_CHECKING:
    from pathlib import Path

    from camsync.client.api import MediaDescriptor, MediaEnumerator
    from camsync.client.sync.fetcher import FileFetcher
    from camsync.core.config import SyncConfig

logger = logging.getLogger(__name__)


def plan_tasks(
    media: MediaDescriptor,
    mapper: PathMapper,
    mirror: bool,
) -> list[TransferTask]:
    """Resolve the files to consider for one media item.

    The primary file is always included. In mirror mode every companion
    file is added as well, mapped from its URL alone.

    Tasks are keyed by destination path. When two URLs map to the same
    path, the later one (in primary, fit, low-res, thumb order) replaces
    the URL while keeping the position of the first.

    Args:
        media: Media descriptor from the camera.
        mapper: Path mapper bound to the output directory.
        mirror: Whether mirror mode is enabled.

    Returns:
        Transfer tasks with distinct destination paths.
    """
    by_path: dict[Path, str] = {}
    by_path[mapper.map(media.name, media.url, mirror)] = media.url
    if mirror:
        for url in media.auxiliary_urls:
            if url:
                by_path[mapper.map("", url, mirror)] = url
    return [TransferTask(url=url, local_path=path) for path, url in by_path.items()]


class SyncEngine:
    """Mirrors media from one camera into the output directory."""

    def __init__(
        self,
        config: SyncConfig,
        enumerator: MediaEnumerator,
        fetcher: FileFetcher,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Sync configuration.
            enumerator: Source of the camera's media list.
            fetcher: Downloads individual files.
        """
        self._config = config
        self._enumerator = enumerator
        self._fetcher = fetcher
        self._mapper = PathMapper(config.output_dir)

    def list_media(self) -> list[MediaDescriptor]:
        """Fetch the current media list.

        Raises:
            EnumerationError: If the camera could not be listed.
        """
        logger.info(f"Fetching media list from {self._config.host}")
        try:
            return self._enumerator.media_list(self._config.media_path)
        except APIError as e:
            raise EnumerationError(f"Media listing failed: {e}") from e

    def run_once(self) -> SyncResult:
        """Run a single sync pass.

        Per-file failures are logged and recorded in the result; they do
        not stop the pass.

        Returns:
            SyncResult for the pass.

        Raises:
            EnumerationError: If the media list could not be fetched.
        """
        media_list = self.list_media()
        result = SyncResult(listed=len(media_list))

        for media in media_list:
            logger.debug(f"Found {media.name}: {media}")
            for task in plan_tasks(media, self._mapper, self._config.mirror):
                self._fetch(task, result)

        logger.info(
            f"Sync pass done: {len(result.downloaded)} downloaded, "
            f"{len(result.skipped)} up to date, {len(result.errors)} failed"
        )
        return result

    def _fetch(self, task: TransferTask, result: SyncResult) -> None:
        """Fetch one task, recording the outcome or the error."""
        if task.url and task.local_path == self._mapper.output_dir:
            logger.error(
                f"File mirroring failed on {task.url} -> {task.local_path}: "
                "destination is the output directory itself"
            )
            result.errors.append(f"{task.url}: maps to the output directory")
            return

        try:
            result.record(self._fetcher.fetch(task.url, task.local_path))
        except TransferError as e:
            logger.error(f"File mirroring failed on {task.url} -> {e.local_path}: {e}")
            result.errors.append(f"{task.url}: {e}")
        except OSError as e:
            logger.error(
                f"File mirroring failed on {task.url} -> {task.local_path}: {e}"
            )
            result.errors.append(f"{task.url}: {e}")
