"""
RetryController tests.

- Retry while under the ceiling, with re-admission at the tail or a hold
- Terminal FAILED once the ceiling is reached
- NonRetryableJobError fails fast
"""

import logging

from diff_voyager.scheduler import (
    JobQueue,
    JobStatus,
    NonRetryableJobError,
    RetryController,
)


def _claim(queue: JobQueue, job):
    claimed = queue.dequeue()
    assert claimed is job
    return claimed


class TestRetryPolicy:

    def test_first_failure_retries(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job(max_retries=3))

        status = retry_controller.handle_failure(job, RuntimeError("timeout"))

        assert status == JobStatus.RETRYING
        assert job.retry_count == 1
        assert job.last_error == "timeout"

    def test_retried_job_is_readmitted_at_tail(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job())
        waiting = create_job()

        retry_controller.handle_failure(job, RuntimeError("timeout"))

        assert [j.id for j in queue.list_jobs()] == [waiting.id, job.id]

    def test_no_requeue_leaves_position(self, queue, create_job):
        controller = RetryController(queue, requeue_retries=False)
        job = _claim(queue, create_job())
        waiting = create_job()

        status = controller.handle_failure(job, RuntimeError("timeout"))

        assert status == JobStatus.RETRYING
        assert [j.id for j in queue.list_jobs()] == [job.id, waiting.id]

    def test_no_requeue_holds_job_until_requeued(self, queue, create_job):
        controller = RetryController(queue, requeue_retries=False)
        job = _claim(queue, create_job())

        controller.handle_failure(job, RuntimeError("timeout"))

        assert queue.dequeue() is None
        queue.requeue(job.id)
        assert queue.dequeue() is job

    def test_cancel_after_retry_transition_does_not_raise(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job())
        original_retry = queue.retry

        def retry_then_cancel(*args, **kwargs):
            retried = original_retry(*args, **kwargs)
            queue.cancel(retried.id)
            return retried

        queue.retry = retry_then_cancel

        status = retry_controller.handle_failure(job, RuntimeError("timeout"))

        assert status == JobStatus.RETRYING
        assert job.status == JobStatus.CANCELLED
        assert queue.dequeue() is None

    def test_ceiling_reached_fails(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job(max_retries=1))
        retry_controller.handle_failure(job, RuntimeError("first"))
        _claim(queue, job)

        status = retry_controller.handle_failure(job, RuntimeError("second"))

        assert status == JobStatus.FAILED
        assert job.retry_count == 1
        assert job.last_error == "second"

    def test_zero_retries_fails_immediately(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job(max_retries=0))

        status = retry_controller.handle_failure(job, RuntimeError("boom"))

        assert status == JobStatus.FAILED
        assert job.retry_count == 0

    def test_non_retryable_error_fails_fast(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job(max_retries=3))

        status = retry_controller.handle_failure(job, NonRetryableJobError("bad payload"))

        assert status == JobStatus.FAILED
        assert job.retry_count == 0
        assert job.last_error == "bad payload"

    def test_empty_error_message_uses_class_name(self, queue, retry_controller, create_job):
        job = _claim(queue, create_job())
        retry_controller.handle_failure(job, TimeoutError())
        assert job.last_error == "TimeoutError"


class TestRetryLogging:

    def test_logs_attempt_number(self, queue, retry_controller, create_job, caplog):
        job = _claim(queue, create_job(max_retries=3))

        with caplog.at_level(logging.INFO, logger="diff_voyager.scheduler.retry_controller"):
            retry_controller.handle_failure(job, RuntimeError("timeout"))

        assert f"Job {job.id} will be retried (attempt 1/3)" in caplog.text

    def test_logs_exhaustion(self, queue, retry_controller, create_job, caplog):
        job = _claim(queue, create_job(max_retries=0))

        with caplog.at_level(logging.ERROR, logger="diff_voyager.scheduler.retry_controller"):
            retry_controller.handle_failure(job, RuntimeError("boom"))

        assert f"Job {job.id} failed after 0 retries" in caplog.text
