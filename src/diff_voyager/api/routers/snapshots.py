"""
Snapshots router.

- POST /api/snapshots - Create a snapshot and enqueue its capture job
- GET /api/projects/{identifier}/snapshots - List a project's snapshots
- GET /api/projects/{identifier}/snapshots/{snapshot_uuid} - Get a snapshot
"""

from fastapi import APIRouter, Depends, HTTPException

from diff_voyager.app import Application
from diff_voyager.errors import ProjectNotFoundError
from diff_voyager.snapshot import Snapshot

from ..dependencies import get_application
from ..schemas.snapshots import (
    SnapshotCreateRequest,
    SnapshotCreateResponse,
    SnapshotListResponse,
    SnapshotResponse,
)


router = APIRouter()


def _snapshot_to_response(snapshot: Snapshot) -> SnapshotResponse:
    """Convert Snapshot entity to API response."""
    return SnapshotResponse(**snapshot.to_dict())


@router.post("/snapshots", response_model=SnapshotCreateResponse, status_code=201)
def create_snapshot(
    request: SnapshotCreateRequest,
    application: Application = Depends(get_application),
):
    """
    Create a snapshot for a project (by UUID or name).

    The capture job runs asynchronously on the worker; the snapshot is
    returned in QUEUED state.
    """
    try:
        snapshot, job = application.snapshot_service.create(
            project_identifier=request.project_id,
            full_scan=request.full_scan,
        )
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return SnapshotCreateResponse(
        snapshot_uuid=snapshot.uuid,
        project_uuid=snapshot.project_uuid,
        job_id=job.id,
        status=snapshot.status.value,
    )


@router.get("/projects/{identifier}/snapshots", response_model=SnapshotListResponse)
def list_snapshots(identifier: str, application: Application = Depends(get_application)):
    """List a project's snapshots, oldest first."""
    try:
        snapshots = application.snapshot_service.list_for_project(identifier)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return SnapshotListResponse(
        snapshots=[_snapshot_to_response(s) for s in snapshots],
        total=len(snapshots),
    )


@router.get(
    "/projects/{identifier}/snapshots/{snapshot_uuid}",
    response_model=SnapshotResponse,
)
def get_snapshot(
    identifier: str,
    snapshot_uuid: str,
    application: Application = Depends(get_application),
):
    """Get a single snapshot of a project."""
    project = application.project_service.find_by_identifier(identifier)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project not found: {identifier}")

    snapshot = application.snapshot_service.get(project.uuid, snapshot_uuid)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"Snapshot not found: {snapshot_uuid}")
    return _snapshot_to_response(snapshot)
