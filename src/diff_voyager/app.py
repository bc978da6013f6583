"""
Application container - wires queue, worker, repositories and services.

Usage:
    application = Application.create(Settings.from_env())
    application.start()
    # ... worker polls the queue in background ...
    application.stop()
"""

import logging
from typing import Optional

from diff_voyager.infra.settings import Settings
from diff_voyager.project import FilesystemProjectRepository, ProjectService
from diff_voyager.scheduler import Executor, JobQueue, RetryController, Worker
from diff_voyager.snapshot import (
    FilesystemSnapshotRepository,
    SnapshotService,
    SnapshotStatusTracker,
)


logger = logging.getLogger(__name__)


class Application:
    """
    Owns every long-lived component of a running Diff Voyager instance.

    The API and the worker share the same JobQueue through this object;
    independent instances (e.g. one per test) do not share state.
    """

    def __init__(
        self,
        settings: Settings,
        queue: JobQueue,
        worker: Worker,
        project_service: ProjectService,
        snapshot_service: SnapshotService,
    ):
        """
        Initialize Application with all components.

        Use Application.create() for convenient construction.
        """
        self.settings = settings
        self.queue = queue
        self.worker = worker
        self.project_service = project_service
        self.snapshot_service = snapshot_service

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        executor: Optional[Executor] = None,
    ) -> "Application":
        """
        Create an Application with all components wired together.

        Args:
            settings: Runtime settings (default: Settings())
            executor: Job executor (default: placeholder snapshot handlers)

        Returns:
            Configured Application, worker not started
        """
        settings = settings or Settings()

        # Storage
        project_repository = FilesystemProjectRepository(settings.data_dir)
        snapshot_repository = FilesystemSnapshotRepository(settings.data_dir)

        # Scheduling
        queue = JobQueue()
        retry_controller = RetryController(
            queue, requeue_retries=settings.requeue_retries
        )
        worker = Worker(
            queue=queue,
            executor=executor or Executor.with_default_handlers(settings.crawl_max_pages),
            retry_controller=retry_controller,
            poll_interval=settings.poll_interval,
        )

        # Job outcomes flow back into snapshot/project records
        worker.add_listener(
            SnapshotStatusTracker(project_repository, snapshot_repository)
        )

        # Services
        project_service = ProjectService(project_repository)
        snapshot_service = SnapshotService(
            project_service=project_service,
            repository=snapshot_repository,
            queue=queue,
            max_retries=settings.job_max_retries,
        )

        return cls(
            settings=settings,
            queue=queue,
            worker=worker,
            project_service=project_service,
            snapshot_service=snapshot_service,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Start the background worker if enabled in settings."""
        if not self.settings.worker_enabled:
            logger.info("Worker disabled (WORKER_ENABLED=false)")
            return
        if self.worker.is_running():
            return
        self.worker.start(blocking=False)

    def stop(self, timeout: float = 30.0) -> None:
        """Stop the worker, letting an in-flight job finish."""
        self.worker.stop(timeout=timeout)
