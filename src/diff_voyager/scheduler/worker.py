"""
Worker loop for Job Scheduler.

- Claims jobs from the JobQueue on a fixed poll interval
- Hands them to the Executor
- Applies the retry / terminal policy through RetryController
- Notifies lifecycle listeners (snapshot/project status wiring)
- Cancels waiting jobs on behalf of callers, so listeners hear about it

Single-worker model:
- One job executes at a time; execution blocks the loop
- Stop is cooperative: the current iteration finishes, nothing is aborted
- No per-job timeout; a hung handler blocks the loop
"""

import logging
import threading
from enum import Enum
from typing import Iterable, Optional

from .entities import Job, JobStatus
from .executor import CaptureResult, Executor
from .queue_manager import JobQueue
from .retry_controller import RetryController


logger = logging.getLogger(__name__)


DEFAULT_POLL_INTERVAL = 5.0


class WorkerState(str, Enum):
    """Worker lifecycle states."""

    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"


class JobLifecycleListener:
    """
    Receives job lifecycle events from the Worker.

    Subclasses override the events they care about. Exceptions raised by a
    listener are logged and do not change the job outcome.
    """

    def on_job_started(self, job: Job) -> None:
        pass

    def on_job_completed(self, job: Job, result: CaptureResult) -> None:
        pass

    def on_job_retrying(self, job: Job, error: BaseException) -> None:
        pass

    def on_job_failed(self, job: Job, error: BaseException) -> None:
        pass

    def on_job_cancelled(self, job: Job) -> None:
        pass


class Worker:
    """
    Pulls jobs from the queue and executes them.

    Loop (every poll_interval seconds until stopped):
    1. Claim the next job (PENDING/RETRYING -> RUNNING)
    2. Execute via Executor
    3. Success -> COMPLETED; error -> RetryController
    4. Notify listeners
    """

    def __init__(
        self,
        queue: JobQueue,
        executor: Executor,
        retry_controller: Optional[RetryController] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        listeners: Optional[Iterable[JobLifecycleListener]] = None,
    ):
        """
        Initialize Worker.

        Args:
            queue: JobQueue to claim jobs from
            executor: Executor that runs type handlers
            retry_controller: Failure policy (default: requeueing controller
                on the same queue)
            poll_interval: Seconds to wait between iterations
            listeners: Lifecycle listeners notified in order
        """
        self.queue = queue
        self.executor = executor
        self.retry_controller = retry_controller or RetryController(queue)
        self.poll_interval = poll_interval
        self._listeners: list[JobLifecycleListener] = list(listeners or [])

        self._state = WorkerState.STOPPED
        self._current_job: Optional[Job] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def state(self) -> WorkerState:
        """Get current worker state."""
        return self._state

    @property
    def current_job(self) -> Optional[Job]:
        """Get the job being executed, if any."""
        return self._current_job

    def add_listener(self, listener: JobLifecycleListener) -> None:
        """Register a lifecycle listener."""
        self._listeners.append(listener)

    # =========================================================================
    # Single Iteration
    # =========================================================================

    def process_next_job(self) -> Optional[Job]:
        """
        Claim and execute a single job.

        Handler errors are contained here and converted into RETRYING or
        FAILED; they never propagate to the caller.

        Returns:
            The processed job, or None if the queue had nothing claimable
        """
        job = self.queue.dequeue()
        if job is None:
            return None

        self._current_job = job
        logger.info(f"Processing job {job.id} ({job.type.value})")

        try:
            self._notify("on_job_started", job)

            try:
                result = self.executor.execute(job)
            except Exception as e:
                logger.warning(f"Job {job.id} attempt failed: {e}")
                status = self.retry_controller.handle_failure(job, e)
                if status == JobStatus.RETRYING:
                    self._notify("on_job_retrying", job, e)
                else:
                    self._notify("on_job_failed", job, e)
                return job

            job.mark_completed()
            logger.info(f"Job {job.id} completed")
            self._notify("on_job_completed", job, result)
            return job

        finally:
            self._current_job = None

    def _notify(self, event: str, job: Job, *args) -> None:
        for listener in self._listeners:
            try:
                getattr(listener, event)(job, *args)
            except Exception as e:
                logger.error(
                    f"Error in {event} listener for job {job.id}: {e}",
                    exc_info=True,
                )

    def cancel(self, job_id: str) -> Job:
        """
        Cancel a PENDING or RETRYING job and notify listeners.

        Raises:
            JobNotFoundError: If job doesn't exist
            InvalidOperationError: If job is not PENDING or RETRYING
        """
        job = self.queue.cancel(job_id)
        self._notify("on_job_cancelled", job)
        return job

    # =========================================================================
    # Loop
    # =========================================================================

    def start(self, blocking: bool = False) -> None:
        """
        Start the worker loop.

        Args:
            blocking: If True, run in current thread. If False, run in background.
        """
        if self._state == WorkerState.STOPPING and not self._thread_alive():
            # An earlier stop() timed out; the old loop has exited since
            self._thread = None
            self._state = WorkerState.STOPPED

        if self._state != WorkerState.STOPPED:
            raise RuntimeError(f"Cannot start worker in {self._state.value} state")

        self._stop_event.clear()
        self._state = WorkerState.RUNNING
        logger.info(f"Worker started, polling every {self.poll_interval}s")

        if blocking:
            try:
                self._run_loop()
            finally:
                self._state = WorkerState.STOPPED
        else:
            self._thread = threading.Thread(
                target=self._run_loop, name="diff-voyager-worker", daemon=True
            )
            self._thread.start()

    def stop(self, timeout: float = 30.0) -> None:
        """
        Stop the worker loop gracefully.

        Waits for the current job to finish (no preemption). If the loop
        thread is still busy after timeout, the worker stays STOPPING and
        start() is refused until that thread exits.

        Args:
            timeout: Maximum seconds to wait for the loop thread
        """
        if self._state == WorkerState.STOPPED:
            return

        logger.info("Stopping worker...")
        self._state = WorkerState.STOPPING
        self._stop_event.set()

        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Worker thread did not stop within timeout")
                return
            self._thread = None

        self._state = WorkerState.STOPPED
        logger.info("Worker stopped")

    def _thread_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.process_next_job()
            except Exception as e:
                logger.error(f"Error in worker loop: {e}", exc_info=True)

            self._stop_event.wait(self.poll_interval)

        logger.info("Worker loop ended")

    def is_running(self) -> bool:
        """Check if the loop is running."""
        return self._state == WorkerState.RUNNING

    def is_busy(self) -> bool:
        """Check if a job is executing."""
        return self._current_job is not None
