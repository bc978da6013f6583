"""
Scheduler Test Fixtures.

Base fixtures:
  - Clean queue
  - Executor backed by a controllable fake handler

Per-test fixtures:
  - create_job factory for pre-populated queues
"""

from typing import Optional

import pytest

from diff_voyager.scheduler import (
    CaptureResult,
    Executor,
    Job,
    JobHandler,
    JobLifecycleListener,
    JobQueue,
    JobType,
    RetryController,
    Worker,
)


class FakeJobHandler(JobHandler):
    """
    Job handler for testing.

    Raises the queued errors one per call, then returns the configured
    result.
    """

    def __init__(self, result: Optional[CaptureResult] = None):
        self.jobs_executed: list[Job] = []
        self.errors: list[BaseException] = []
        self.result = result or CaptureResult(captured_pages=["https://example.com"])
        self.always_fail: Optional[BaseException] = None

    def fail_with(self, *errors: BaseException) -> None:
        """Raise these errors on the next calls, in order."""
        self.errors.extend(errors)

    def execute(self, job: Job) -> CaptureResult:
        self.jobs_executed.append(job)
        if self.always_fail is not None:
            raise self.always_fail
        if self.errors:
            raise self.errors.pop(0)
        return self.result


class RecordingListener(JobLifecycleListener):
    """Listener that records (event, job_id, status) tuples."""

    def __init__(self):
        self.events: list[tuple[str, str, str]] = []
        self.results: list[CaptureResult] = []

    def on_job_started(self, job):
        self.events.append(("started", job.id, job.status.value))

    def on_job_completed(self, job, result):
        self.events.append(("completed", job.id, job.status.value))
        self.results.append(result)

    def on_job_retrying(self, job, error):
        self.events.append(("retrying", job.id, job.status.value))

    def on_job_failed(self, job, error):
        self.events.append(("failed", job.id, job.status.value))

    def on_job_cancelled(self, job):
        self.events.append(("cancelled", job.id, job.status.value))

    def names(self) -> list[str]:
        return [event for event, _, _ in self.events]


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def queue() -> JobQueue:
    return JobQueue()


@pytest.fixture
def handler() -> FakeJobHandler:
    return FakeJobHandler()


@pytest.fixture
def executor(handler) -> Executor:
    """Executor with the fake handler registered for both snapshot types."""
    return Executor(
        {
            JobType.SNAPSHOT_SINGLE: handler,
            JobType.SNAPSHOT_CRAWL: handler,
        }
    )


@pytest.fixture
def retry_controller(queue) -> RetryController:
    return RetryController(queue)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def worker(queue, executor, retry_controller, listener):
    w = Worker(
        queue=queue,
        executor=executor,
        retry_controller=retry_controller,
        poll_interval=0.01,
        listeners=[listener],
    )
    yield w
    w.stop(timeout=5)


# =============================================================================
# Job Factory
# =============================================================================


@pytest.fixture
def create_job(queue):
    """
    Factory fixture: create a job and enqueue it.

    Usage:
        job = create_job()
        job = create_job(max_retries=0, enqueue=False)
    """

    def _create(
        job_type: JobType = JobType.SNAPSHOT_SINGLE,
        payload: Optional[dict] = None,
        max_retries: Optional[int] = None,
        enqueue: bool = True,
    ) -> Job:
        if payload is None:
            payload = {"url": "https://example.com"}
        job = Job.create(job_type, payload, max_retries=max_retries)
        if enqueue:
            queue.enqueue(job)
        return job

    return _create
