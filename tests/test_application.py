"""
Application container tests.
"""

import time

from diff_voyager.app import Application
from diff_voyager.infra.settings import Settings
from diff_voyager.project import ProjectStatus
from diff_voyager.scheduler import WorkerState
from diff_voyager.snapshot import SnapshotStatus


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestApplicationWiring:

    def test_components_share_queue(self, application: Application):
        assert application.worker.queue is application.queue
        assert application.snapshot_service.queue is application.queue
        assert application.worker.retry_controller.queue is application.queue

    def test_settings_flow_into_components(self, data_dir):
        settings = Settings(
            data_dir=data_dir,
            poll_interval_ms=250,
            job_max_retries=5,
            requeue_retries=False,
            worker_enabled=False,
            log_dir=None,
        )
        application = Application.create(settings)

        assert application.worker.poll_interval == 0.25
        assert application.snapshot_service.max_retries == 5
        assert application.worker.retry_controller.requeue_retries is False

    def test_independent_instances(self, settings):
        first = Application.create(settings)
        second = Application.create(settings)
        assert first.queue is not second.queue

    def test_start_respects_worker_disabled(self, application: Application):
        application.start()
        assert application.worker.state == WorkerState.STOPPED


class TestApplicationEndToEnd:

    def test_snapshot_completes_in_background(self, data_dir):
        settings = Settings(
            data_dir=data_dir, poll_interval_ms=10, worker_enabled=True, log_dir=None
        )
        application = Application.create(settings)
        project = application.project_service.create(name="site", url="https://example.com")
        snapshot, _ = application.snapshot_service.create(project.uuid)

        application.start()
        try:
            assert application.worker.is_running()

            def done():
                stored = application.snapshot_service.get(project.uuid, snapshot.uuid)
                return stored.status == SnapshotStatus.COMPLETED

            assert _wait_for(done)
        finally:
            application.stop(timeout=5)

        assert application.worker.state == WorkerState.STOPPED
        stored_project = application.project_service.find_by_identifier("site")
        assert stored_project.status == ProjectStatus.COMPLETED
