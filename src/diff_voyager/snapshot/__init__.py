"""
Snapshot module: entity, filesystem storage, service and job status tracking.
"""

from .entities import TERMINAL_SNAPSHOT_STATUSES, Snapshot, SnapshotStatus
from .repository import FilesystemSnapshotRepository, SnapshotRepository
from .service import SnapshotService
from .tracker import SnapshotStatusTracker

__all__ = [
    "TERMINAL_SNAPSHOT_STATUSES",
    "Snapshot",
    "SnapshotStatus",
    "SnapshotRepository",
    "FilesystemSnapshotRepository",
    "SnapshotService",
    "SnapshotStatusTracker",
]
