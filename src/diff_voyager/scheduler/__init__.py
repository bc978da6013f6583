"""
Job Scheduler Core Module.

In-memory job queue, type-dispatched executor, retry policy and the worker
loop that ties them together.
"""

from .entities import (
    DEFAULT_MAX_RETRIES,
    JobStatus,
    JobType,
    Job,
)
from .errors import (
    SchedulerError,
    InvalidOperationError,
    JobNotFoundError,
    NonRetryableJobError,
    UnknownJobTypeError,
)
from .queue_manager import JobQueue
from .executor import (
    CaptureResult,
    Executor,
    JobHandler,
    SnapshotCrawlHandler,
    SnapshotSingleHandler,
)
from .retry_controller import RetryController
from .worker import JobLifecycleListener, Worker, WorkerState

__all__ = [
    # Entities
    "DEFAULT_MAX_RETRIES",
    "JobStatus",
    "JobType",
    "Job",
    # Errors
    "SchedulerError",
    "InvalidOperationError",
    "JobNotFoundError",
    "NonRetryableJobError",
    "UnknownJobTypeError",
    # Queue
    "JobQueue",
    # Executor
    "CaptureResult",
    "Executor",
    "JobHandler",
    "SnapshotCrawlHandler",
    "SnapshotSingleHandler",
    # Retry
    "RetryController",
    # Worker
    "JobLifecycleListener",
    "Worker",
    "WorkerState",
]
