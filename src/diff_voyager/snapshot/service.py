"""
Snapshot service: create / get / list for the API layer.

Creating a snapshot admits a capture job to the queue; the worker picks it
up and SnapshotStatusTracker reports progress back into storage.
"""

import logging
from typing import Optional

from diff_voyager.errors import ProjectNotFoundError
from diff_voyager.project import Project, ProjectService, ProjectStatus
from diff_voyager.scheduler import DEFAULT_MAX_RETRIES, Job, JobQueue, JobType

from .entities import Snapshot
from .repository import SnapshotRepository


logger = logging.getLogger(__name__)


class SnapshotService:
    """Creates snapshots and hands their capture work to the job queue."""

    def __init__(
        self,
        project_service: ProjectService,
        repository: SnapshotRepository,
        queue: JobQueue,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.project_service = project_service
        self.repository = repository
        self.queue = queue
        self.max_retries = max_retries

    def _resolve_project(self, identifier: str) -> Project:
        project = self.project_service.find_by_identifier(identifier)
        if project is None:
            raise ProjectNotFoundError(identifier)
        return project

    def create(self, project_identifier: str, full_scan: bool = False) -> tuple[Snapshot, Job]:
        """
        Create a snapshot for a project and enqueue its capture job.

        Args:
            project_identifier: Project UUID or name
            full_scan: Crawl the whole domain instead of the single URL

        Returns:
            (snapshot, job) with the snapshot already QUEUED

        Raises:
            ProjectNotFoundError: If the identifier matches no project
        """
        project = self._resolve_project(project_identifier)

        snapshot = Snapshot.create(project_uuid=project.uuid, full_scan=full_scan)
        self.repository.save(project.uuid, snapshot)

        job = Job.create(
            job_type=JobType.SNAPSHOT_CRAWL if full_scan else JobType.SNAPSHOT_SINGLE,
            payload={
                "project_uuid": project.uuid,
                "snapshot_uuid": snapshot.uuid,
                "url": project.url,
            },
            max_retries=self.max_retries,
        )

        # Persist QUEUED before the worker can see the job, so its
        # IN_PROGRESS update is never overwritten by this request
        snapshot.mark_queued(job.id)
        self.repository.save(project.uuid, snapshot)
        project.update_status(ProjectStatus.QUEUED)
        self.project_service.repository.save(project)

        self.queue.enqueue(job)

        logger.info(
            f"Snapshot {snapshot.uuid} queued for project {project.name} "
            f"(job={job.id}, type={job.type.value})"
        )
        return snapshot, job

    def get(self, project_uuid: str, snapshot_uuid: str) -> Optional[Snapshot]:
        return self.repository.find_by_uuid(project_uuid, snapshot_uuid)

    def list_for_project(self, project_identifier: str) -> list[Snapshot]:
        """
        List a project's snapshots, oldest first.

        Raises:
            ProjectNotFoundError: If the identifier matches no project
        """
        project = self._resolve_project(project_identifier)
        return self.repository.list_by_project(project.uuid)
