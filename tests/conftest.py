"""
Pytest configuration and shared fixtures.

Every fixture that touches storage works inside tmp_path, so tests never
share state through the filesystem or a module-level queue.
"""

import pytest

from diff_voyager.app import Application
from diff_voyager.infra.settings import Settings
from diff_voyager.project import FilesystemProjectRepository, ProjectService
from diff_voyager.scheduler import JobQueue
from diff_voyager.snapshot import FilesystemSnapshotRepository, SnapshotService


@pytest.fixture
def data_dir(tmp_path):
    """Empty data directory for filesystem repositories."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def settings(data_dir) -> Settings:
    """Settings with the worker disabled and file logging off."""
    return Settings(
        data_dir=data_dir,
        poll_interval_ms=10,
        job_max_retries=3,
        worker_enabled=False,
        log_dir=None,
    )


@pytest.fixture
def application(settings) -> Application:
    """Fully wired Application whose worker is not started."""
    return Application.create(settings)


@pytest.fixture
def project_repository(data_dir) -> FilesystemProjectRepository:
    return FilesystemProjectRepository(data_dir)


@pytest.fixture
def snapshot_repository(data_dir) -> FilesystemSnapshotRepository:
    return FilesystemSnapshotRepository(data_dir)


@pytest.fixture
def project_service(project_repository) -> ProjectService:
    return ProjectService(project_repository)


@pytest.fixture
def job_queue() -> JobQueue:
    return JobQueue()


@pytest.fixture
def snapshot_service(project_service, snapshot_repository, job_queue) -> SnapshotService:
    return SnapshotService(
        project_service=project_service,
        repository=snapshot_repository,
        queue=job_queue,
        max_retries=3,
    )


@pytest.fixture
def create_project(project_service):
    """Factory fixture: create and persist a project."""
    counter = {"n": 0}

    def _create(name: str = None, url: str = "https://example.com"):
        if name is None:
            counter["n"] += 1
            name = f"project-{counter['n']}"
        return project_service.create(name=name, url=url)

    return _create
