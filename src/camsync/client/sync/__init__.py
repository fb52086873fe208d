"""Sync operations for mirroring camera media.

Architecture:
    PollScheduler → SyncEngine → PathMapper / FileFetcher

Components:
- **PollScheduler**: Runs passes once or on a fixed interval
- **SyncEngine**: Lists camera media and resolves transfer tasks
- **PathMapper**: Maps camera URLs and names to local paths
- **FileFetcher**: Size-checked streaming download of a single file
"""

from camsync.client.sync.engine import SyncEngine, plan_tasks
from camsync.client.sync.fetcher import (
    CHUNK_SIZE,
    PART_SUFFIX,
    FileFetcher,
    content_length,
    is_up_to_date,
)
from camsync.client.sync.paths import DEFAULT_MARKERS, PathMapper, url_suffix
from camsync.client.sync.scheduler import PollScheduler
from camsync.client.sync.types import (
    EnumerationError,
    FetchOutcome,
    FetchResult,
    PassCallback,
    SyncError,
    SyncResult,
    TransferError,
    TransferTask,
)

__all__ = [
    # Engine
    "SyncEngine",
    "plan_tasks",
    # Fetcher
    "CHUNK_SIZE",
    "FileFetcher",
    "PART_SUFFIX",
    "content_length",
    "is_up_to_date",
    # Paths
    "DEFAULT_MARKERS",
    "PathMapper",
    "url_suffix",
    # Scheduler
    "PollScheduler",
    # Types
    "EnumerationError",
    "FetchOutcome",
    "FetchResult",
    "PassCallback",
    "SyncError",
    "SyncResult",
    "TransferError",
    "TransferTask",
]
