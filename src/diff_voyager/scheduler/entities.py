"""
Scheduler Domain Entities.

- JobType: kind of work, selects the handler
- JobStatus: queue-level lifecycle of a Job
- Job: single unit of work queued for execution

Job lifecycle:
    PENDING -> RUNNING -> COMPLETED
                       -> RETRYING -> (re-admitted) -> RUNNING -> ...
                       -> FAILED            (retry ceiling reached)
    CANCELLED is reachable from any non-terminal status.

Transition methods do not persist anything; the owner of the job (queue or
worker) is responsible for that. Leaving a terminal status raises
InvalidTransitionError.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from diff_voyager.errors import InvalidTransitionError
from diff_voyager.infra.identifiers import generate_uuid, to_iso, utc_now


DEFAULT_MAX_RETRIES = 3


class JobType(str, Enum):
    """
    Job type values.

    - SNAPSHOT_SINGLE: Capture a single page
    - SNAPSHOT_CRAWL: Crawl and capture a whole domain
    """

    SNAPSHOT_SINGLE = "SNAPSHOT_SINGLE"
    SNAPSHOT_CRAWL = "SNAPSHOT_CRAWL"


class JobStatus(str, Enum):
    """Job status values."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    RETRYING = "RETRYING"
    CANCELLED = "CANCELLED"


TERMINAL_JOB_STATUSES = frozenset(
    {JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED}
)

# Statuses the queue may hand to a worker
CLAIMABLE_JOB_STATUSES = frozenset({JobStatus.PENDING, JobStatus.RETRYING})


@dataclass
class Job:
    """
    Single unit of work queued for execution.

    Mutability rules:
    - id, type, payload, max_retries, created_at: Immutable
    - status, retry_count, last_error, updated_at: Changed only through the
      mark_* methods
    """

    id: str
    type: JobType
    payload: dict
    status: JobStatus = JobStatus.PENDING
    retry_count: int = 0
    max_retries: int = DEFAULT_MAX_RETRIES
    last_error: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        job_type: JobType,
        payload: Optional[dict] = None,
        max_retries: Optional[int] = None,
    ) -> "Job":
        """
        Create a new PENDING Job with generated ID.

        Args:
            job_type: Kind of work
            payload: Handler input, not inspected by the scheduler
            max_retries: Retry ceiling (default: DEFAULT_MAX_RETRIES)

        Raises:
            ValueError: If max_retries is negative
        """
        if max_retries is None:
            max_retries = DEFAULT_MAX_RETRIES
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")

        now = utc_now()
        return cls(
            id=generate_uuid(),
            type=JobType(job_type),
            payload=payload if payload is not None else {},
            max_retries=max_retries,
            created_at=now,
            updated_at=now,
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def mark_running(self) -> None:
        """Transition into RUNNING (claimed by a worker)."""
        self._transition(JobStatus.RUNNING)

    def mark_completed(self) -> None:
        """Transition into COMPLETED."""
        self._transition(JobStatus.COMPLETED)

    def mark_failed(self, error: Optional[str] = None) -> None:
        """Transition into terminal FAILED, recording the error if given."""
        self._transition(JobStatus.FAILED)
        if error is not None:
            self.last_error = error

    def mark_for_retry(self, error: Optional[str] = None) -> None:
        """
        Count a failed attempt and transition into RETRYING.

        Does not check the retry ceiling; callers consult can_retry() first.
        """
        self._transition(JobStatus.RETRYING)
        self.retry_count += 1
        if error is not None:
            self.last_error = error

    def mark_cancelled(self) -> None:
        """Transition into terminal CANCELLED."""
        self._transition(JobStatus.CANCELLED)

    def can_retry(self) -> bool:
        """Check if another attempt is allowed under max_retries."""
        return self.retry_count < self.max_retries

    def is_terminal(self) -> bool:
        """Check if job is in a terminal state."""
        return self.status in TERMINAL_JOB_STATUSES

    def _transition(self, status: JobStatus) -> None:
        # Every mark_* is otherwise unconditional; only leaving a terminal
        # status is refused, so a finished job cannot be revived
        if self.is_terminal():
            raise InvalidTransitionError("Job", self.status.value, status.value)
        self.status = status
        self._touch()

    def _touch(self) -> None:
        # updated_at never moves backwards, even if the wall clock does
        self.updated_at = max(utc_now(), self.updated_at)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Convert job to a JSON-ready dictionary."""
        return {
            "id": self.id,
            "type": self.type.value,
            "payload": self.payload,
            "status": self.status.value,
            "retry_count": self.retry_count,
            "max_retries": self.max_retries,
            "last_error": self.last_error,
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }
