"""
Executor for Job Scheduler.

- Looks up the handler registered for a job's type
- Runs it and returns its CaptureResult

What Executor MUST NOT do:
- Change job status (Worker's responsibility)
- Decide retry policy (RetryController's responsibility)
- Catch handler exceptions; they propagate to the Worker

Capture and crawl are placeholders: the handlers below record what they were
asked to capture but do not drive a browser.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from .entities import Job, JobType
from .errors import NonRetryableJobError, UnknownJobTypeError


logger = logging.getLogger(__name__)


@dataclass
class CaptureResult:
    """
    Outcome of a successful handler run.

    failed_pages holds pages that errored without failing the whole job.
    """

    captured_pages: list[str] = field(default_factory=list)
    failed_pages: list[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        """True when some pages failed while others were captured."""
        return bool(self.captured_pages) and bool(self.failed_pages)


class JobHandler(ABC):
    """
    Abstract base class for job type handlers.

    Each JobType maps to one handler. Raising any exception from execute()
    marks the attempt as failed.
    """

    @abstractmethod
    def execute(self, job: Job) -> CaptureResult:
        """
        Execute the job.

        Args:
            job: The claimed job; handlers read job.payload

        Returns:
            CaptureResult for the attempt
        """
        ...


def _payload_url(job: Job) -> str:
    url = job.payload.get("url") if isinstance(job.payload, dict) else None
    if not url:
        raise NonRetryableJobError(f"Job {job.id} payload has no url")
    return url


class SnapshotSingleHandler(JobHandler):
    """Single page capture."""

    def execute(self, job: Job) -> CaptureResult:
        url = _payload_url(job)
        logger.info(f"Capturing single page for job {job.id}: {url}")
        return CaptureResult(captured_pages=[url])


class SnapshotCrawlHandler(JobHandler):
    """
    Whole-domain crawl and capture.

    max_pages bounds the crawl once page discovery exists; today only the
    start URL is visited.
    """

    def __init__(self, max_pages: int = 100):
        self.max_pages = max_pages

    def execute(self, job: Job) -> CaptureResult:
        url = _payload_url(job)
        logger.info(
            f"Crawling domain for job {job.id}: {url} (max_pages={self.max_pages})"
        )
        return CaptureResult(captured_pages=[url])


class Executor:
    """
    Dispatches jobs to their type handler.

    Execution is synchronous; the Worker blocks until execute() returns or
    raises.
    """

    def __init__(self, handlers: Optional[dict[JobType, JobHandler]] = None):
        self._handlers: dict[JobType, JobHandler] = dict(handlers or {})

    @classmethod
    def with_default_handlers(cls, max_pages: int = 100) -> "Executor":
        """Create an Executor with the snapshot handlers registered."""
        return cls(
            {
                JobType.SNAPSHOT_SINGLE: SnapshotSingleHandler(),
                JobType.SNAPSHOT_CRAWL: SnapshotCrawlHandler(max_pages=max_pages),
            }
        )

    def register(self, job_type: JobType, handler: JobHandler) -> None:
        """Register (or replace) the handler for a job type."""
        self._handlers[JobType(job_type)] = handler

    def execute(self, job: Job) -> CaptureResult:
        """
        Run the handler for job.type.

        Raises:
            UnknownJobTypeError: If no handler is registered
            Exception: Whatever the handler raises
        """
        handler = self._handlers.get(job.type)
        if handler is None:
            raise UnknownJobTypeError(job.type.value)

        result = handler.execute(job)
        if result is None:
            result = CaptureResult()
        return result
