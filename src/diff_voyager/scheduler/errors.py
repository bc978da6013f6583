"""
Scheduler-specific exceptions.

Handler failures are not represented here: any exception a handler raises is
caught by the Worker and turned into a RETRYING or FAILED job. The only
handler-facing exception is NonRetryableJobError, which skips the retry
policy.
"""

from diff_voyager.errors import DiffVoyagerError


class SchedulerError(DiffVoyagerError):
    """Base exception for all scheduler errors."""
    pass


class InvalidOperationError(SchedulerError):
    """
    Raised when a queue operation does not apply to the job's status.

    Examples:
    - Cancelling a RUNNING job (no preemption)
    - Re-admitting a job that is not RETRYING
    """
    pass


class JobNotFoundError(SchedulerError):
    """Raised when a requested job does not exist."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


class NonRetryableJobError(SchedulerError):
    """
    Raised by a handler to fail the job without consuming retries.

    The job goes straight to FAILED regardless of retry_count.
    """
    pass


class UnknownJobTypeError(NonRetryableJobError):
    """Raised when no handler is registered for a job type."""

    def __init__(self, job_type: str):
        self.job_type = job_type
        super().__init__(f"No handler registered for job type: {job_type}")
