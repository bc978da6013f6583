"""
In-memory Job Queue.

- Holds every known job keyed by ID, in insertion order
- Hands out jobs with an atomic claim (PENDING/RETRYING -> RUNNING)
- Applies retry transitions together with re-admission (or hold)
- Supports explicit re-admission of held jobs and cancellation

What JobQueue MUST NOT do:
- Execute jobs (Executor's responsibility)
- Decide retry policy (RetryController's responsibility)
- Touch Project or Snapshot records

The queue is process-local. It is constructed by its owner and passed to the
worker and to whatever enqueues jobs, so independent queues can coexist.
"""

import logging
import threading
from typing import Optional

from .entities import CLAIMABLE_JOB_STATUSES, Job, JobStatus
from .errors import InvalidOperationError, JobNotFoundError


logger = logging.getLogger(__name__)


class JobQueue:
    """
    Insertion-ordered job store with exclusive claims.

    Key behaviors:
    - Ordering: claims are FIFO by enqueue (or re-admission) order
    - Claim: scan + status flip happen under one lock, so two concurrent
      dequeue() calls never return the same job
    - Retry: retry() flips RUNNING -> RETRYING and either moves the job to
      the tail or holds it; held jobs are not claimable until requeue()
    - Cancellation: PENDING/RETRYING -> CANCELLED only
    """

    def __init__(self):
        # dict preserves insertion order
        self._jobs: dict[str, Job] = {}
        # RETRYING jobs waiting for an explicit requeue()
        self._held: set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    # =========================================================================
    # Insertion & Claim
    # =========================================================================

    def enqueue(self, job: Job) -> str:
        """
        Add a job to the queue.

        A job whose ID is already present replaces the stored job in place,
        keeping its original position.

        Returns:
            The job's ID
        """
        with self._lock:
            self._jobs[job.id] = job

        logger.debug(f"Enqueued job {job.id} (type={job.type.value})")
        return job.id

    def dequeue(self) -> Optional[Job]:
        """
        Claim the oldest claimable job.

        Scans in insertion order and returns the first PENDING or RETRYING
        job that is not held, transitioned to RUNNING before the lock is
        released.

        Returns:
            The claimed job, or None if nothing is claimable
        """
        with self._lock:
            for job in self._jobs.values():
                if job.status in CLAIMABLE_JOB_STATUSES and job.id not in self._held:
                    job.mark_running()
                    return job
        return None

    def retry(self, job: Job, error: Optional[str] = None, readmit: bool = True) -> Job:
        """
        Count a failed attempt and put the job back in line.

        The RETRYING transition and the re-admission happen under the queue
        lock, so a cancel() can only observe the job once it is in place.

        Args:
            job: RUNNING job whose attempt failed
            error: Error message to record
            readmit: Move the job to the tail (True) or hold it until
                requeue() is called (False)

        Returns:
            The RETRYING Job
        """
        with self._lock:
            job.mark_for_retry(error)
            if readmit:
                self._jobs.pop(job.id, None)
                self._jobs[job.id] = job
            else:
                self._jobs.setdefault(job.id, job)
                self._held.add(job.id)
        return job

    def requeue(self, job_id: str) -> Job:
        """
        Re-admit a RETRYING job at the tail of the queue.

        Releases a job held by retry(readmit=False).

        Args:
            job_id: Job to re-admit

        Returns:
            The re-admitted Job

        Raises:
            JobNotFoundError: If job doesn't exist
            InvalidOperationError: If job is not RETRYING
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)

            if job.status != JobStatus.RETRYING:
                raise InvalidOperationError(
                    f"Cannot requeue job in {job.status.value} status. "
                    "Only RETRYING jobs can be re-admitted."
                )

            self._held.discard(job_id)
            del self._jobs[job_id]
            self._jobs[job_id] = job

        logger.info(f"Requeued job {job_id}")
        return job

    # =========================================================================
    # Retrieval
    # =========================================================================

    def get_job(self, job_id: str) -> Optional[Job]:
        """Get a job by ID, regardless of status."""
        with self._lock:
            return self._jobs.get(job_id)

    def list_jobs(self, status: Optional[JobStatus] = None) -> list[Job]:
        """
        List jobs in queue order.

        Args:
            status: Only return jobs with this status

        Returns:
            Jobs in insertion order
        """
        with self._lock:
            jobs = list(self._jobs.values())

        if status is None:
            return jobs

        status = JobStatus(status)
        return [job for job in jobs if job.status == status]

    def count_by_status(self) -> dict[str, int]:
        """Get job counts keyed by status value (every status present)."""
        counts = {status.value: 0 for status in JobStatus}
        with self._lock:
            for job in self._jobs.values():
                counts[job.status.value] += 1
        return counts

    # =========================================================================
    # Cancellation
    # =========================================================================

    def cancel(self, job_id: str) -> Job:
        """
        Cancel a job that is waiting to be claimed.

        RUNNING jobs are owned by the worker and run to completion.

        Raises:
            JobNotFoundError: If job doesn't exist
            InvalidOperationError: If job is not PENDING or RETRYING
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)

            if job.status not in CLAIMABLE_JOB_STATUSES:
                raise InvalidOperationError(
                    f"Cannot cancel job in {job.status.value} status. "
                    "Only PENDING or RETRYING jobs can be cancelled."
                )

            job.mark_cancelled()
            self._held.discard(job_id)

        logger.info(f"Cancelled job {job_id}")
        return job
