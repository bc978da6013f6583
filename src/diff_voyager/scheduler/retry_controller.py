"""
Retry Controller for Job Scheduler.

- Decides between RETRYING and terminal FAILED after a handler error
- Hands retried jobs back to the queue (tail or held)

Policy:
    NonRetryableJobError      -> FAILED (no retry consumed)
    can_retry()               -> RETRYING, retry_count += 1, re-admit or hold
    otherwise                 -> FAILED (retry ceiling reached)

What RetryController MUST NOT do:
- Execute jobs
- Touch Project or Snapshot records
"""

import logging

from .entities import Job, JobStatus
from .errors import NonRetryableJobError
from .queue_manager import JobQueue


logger = logging.getLogger(__name__)


class RetryController:
    """
    Applies the retry / terminal policy to a failed attempt.

    With requeue_retries=False a RETRYING job is held by the queue and is
    not claimed again until an external JobQueue.requeue() call.
    """

    def __init__(self, queue: JobQueue, requeue_retries: bool = True):
        """
        Initialize RetryController.

        Args:
            queue: JobQueue used to re-admit retried jobs
            requeue_retries: Re-admit RETRYING jobs automatically
        """
        self.queue = queue
        self.requeue_retries = requeue_retries

    def handle_failure(self, job: Job, error: BaseException) -> JobStatus:
        """
        Handle a failed attempt of a RUNNING job.

        Args:
            job: The job whose handler raised
            error: The raised exception

        Returns:
            The job's new status (RETRYING or FAILED)
        """
        message = str(error) or error.__class__.__name__

        if isinstance(error, NonRetryableJobError):
            job.mark_failed(message)
            logger.warning(f"Job {job.id} failed without retry: {message}")
            return job.status

        if job.can_retry():
            self.queue.retry(job, message, readmit=self.requeue_retries)
            logger.info(
                f"Job {job.id} will be retried "
                f"(attempt {job.retry_count}/{job.max_retries})"
            )
            if not self.requeue_retries:
                logger.info(f"Job {job.id} held until requeued")
            return JobStatus.RETRYING

        job.mark_failed(message)
        logger.error(f"Job {job.id} failed after {job.max_retries} retries")
        return job.status
