"""
Snapshot entity.

A Snapshot is one capture run of a Project, either a single page or the
whole domain (full_scan). Lifecycle:

    PENDING -> QUEUED -> IN_PROGRESS -> COMPLETED | PARTIAL | FAILED
                  ^           |
                  +-----------+  (job retrying)

COMPLETED, PARTIAL and FAILED are terminal.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from diff_voyager.errors import InvalidTransitionError
from diff_voyager.infra.identifiers import from_iso, generate_uuid, to_iso, utc_now


class SnapshotStatus(str, Enum):
    """
    Snapshot status values.

    PARTIAL: completed, but some pages failed to capture
    """

    PENDING = "PENDING"
    QUEUED = "QUEUED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"


TERMINAL_SNAPSHOT_STATUSES = frozenset(
    {SnapshotStatus.COMPLETED, SnapshotStatus.PARTIAL, SnapshotStatus.FAILED}
)


@dataclass
class Snapshot:
    """Single capture run belonging to a Project."""

    uuid: str
    project_uuid: str
    full_scan: bool = False
    status: SnapshotStatus = SnapshotStatus.PENDING
    job_id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(cls, project_uuid: str, full_scan: bool = False) -> "Snapshot":
        """
        Create a new PENDING snapshot with generated ID.

        project_uuid is trusted; the caller checks that the project exists.
        """
        now = utc_now()
        return cls(
            uuid=generate_uuid(),
            project_uuid=project_uuid,
            full_scan=bool(full_scan),
            status=SnapshotStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def restore(cls, record: dict[str, Any]) -> "Snapshot":
        """Rebuild a snapshot from a trusted stored record, without checks."""
        return cls(
            uuid=record["uuid"],
            project_uuid=record["project_uuid"],
            full_scan=bool(record["full_scan"]),
            status=SnapshotStatus(record["status"]),
            job_id=record.get("job_id"),
            created_at=from_iso(record["created_at"]),
            updated_at=from_iso(record["updated_at"]),
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def mark_queued(self, job_id: Optional[str] = None) -> None:
        """Record the job executing this snapshot and transition into QUEUED."""
        self._transition(SnapshotStatus.QUEUED)
        if job_id is not None:
            self.job_id = job_id

    def mark_in_progress(self) -> None:
        self._transition(SnapshotStatus.IN_PROGRESS)

    def mark_completed(self) -> None:
        self._transition(SnapshotStatus.COMPLETED)

    def mark_partial(self) -> None:
        self._transition(SnapshotStatus.PARTIAL)

    def mark_failed(self) -> None:
        self._transition(SnapshotStatus.FAILED)

    def is_terminal(self) -> bool:
        return self.status in TERMINAL_SNAPSHOT_STATUSES

    def _transition(self, status: SnapshotStatus) -> None:
        if self.is_terminal():
            raise InvalidTransitionError("Snapshot", self.status.value, status.value)
        self.status = status
        self.updated_at = max(utc_now(), self.updated_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to a JSON-ready record."""
        return {
            "uuid": self.uuid,
            "project_uuid": self.project_uuid,
            "full_scan": self.full_scan,
            "status": self.status.value,
            "job_id": self.job_id,
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }
