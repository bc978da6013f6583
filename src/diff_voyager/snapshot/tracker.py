"""
Lifecycle wiring from job events back to Snapshot and Project records.
"""

import logging
import threading
from typing import Callable, Optional

from diff_voyager.project import Project, ProjectRepository, ProjectStatus
from diff_voyager.scheduler import CaptureResult, Job, JobLifecycleListener, JobStatus

from .entities import Snapshot
from .repository import SnapshotRepository


logger = logging.getLogger(__name__)


class SnapshotStatusTracker(JobLifecycleListener):
    """
    Mirrors job outcomes onto the snapshot and project a job belongs to.

    Event mapping:
        started   -> snapshot IN_PROGRESS, project RUNNING
        completed -> snapshot COMPLETED (PARTIAL if some pages failed), project COMPLETED
        retrying  -> snapshot QUEUED, project QUEUED
        failed    -> snapshot FAILED, project FAILED
        cancelled -> snapshot FAILED, project CANCELLED

    Jobs without snapshot_uuid/project_uuid in their payload are ignored.
    Events are applied one at a time; a retrying event for a job that was
    cancelled in the meantime is dropped.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        snapshot_repository: SnapshotRepository,
    ):
        self.project_repository = project_repository
        self.snapshot_repository = snapshot_repository
        self._lock = threading.Lock()

    def on_job_started(self, job: Job) -> None:
        self._apply(job, Snapshot.mark_in_progress, ProjectStatus.RUNNING)

    def on_job_completed(self, job: Job, result: CaptureResult) -> None:
        mark = Snapshot.mark_partial if result.is_partial else Snapshot.mark_completed
        self._apply(job, mark, ProjectStatus.COMPLETED)

    def on_job_retrying(self, job: Job, error: BaseException) -> None:
        self._apply(
            job,
            lambda snapshot: snapshot.mark_queued(),
            ProjectStatus.QUEUED,
            only_if=JobStatus.RETRYING,
        )

    def on_job_failed(self, job: Job, error: BaseException) -> None:
        self._apply(job, Snapshot.mark_failed, ProjectStatus.FAILED)

    def on_job_cancelled(self, job: Job) -> None:
        self._apply(job, Snapshot.mark_failed, ProjectStatus.CANCELLED)

    def _apply(
        self,
        job: Job,
        mark_snapshot: Callable[[Snapshot], None],
        project_status: ProjectStatus,
        only_if: Optional[JobStatus] = None,
    ) -> None:
        project_uuid = job.payload.get("project_uuid")
        snapshot_uuid = job.payload.get("snapshot_uuid")
        if not project_uuid or not snapshot_uuid:
            return

        with self._lock:
            if only_if is not None and job.status != only_if:
                logger.debug(
                    f"Job {job.id} is {job.status.value}, not {only_if.value}; skipping"
                )
                return

            snapshot = self.snapshot_repository.find_by_uuid(project_uuid, snapshot_uuid)
            if snapshot is None:
                logger.warning(f"Snapshot {snapshot_uuid} not found for job {job.id}, skipping")
            else:
                mark_snapshot(snapshot)
                self.snapshot_repository.save(project_uuid, snapshot)
                logger.debug(f"Snapshot {snapshot.uuid} -> {snapshot.status.value}")

            project: Optional[Project] = self.project_repository.find_by_uuid(project_uuid)
            if project is None:
                logger.warning(f"Project {project_uuid} not found for job {job.id}, skipping")
                return
            project.update_status(project_status)
            self.project_repository.save(project)
