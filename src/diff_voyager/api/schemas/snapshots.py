"""
Snapshot API schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class SnapshotCreateRequest(BaseModel):
    """Request to capture a new snapshot of a project."""

    project_id: str = Field(..., min_length=1, description="Project UUID or name")
    full_scan: bool = Field(
        default=False,
        description="Crawl the whole domain instead of the project URL only"
    )


class SnapshotCreateResponse(BaseModel):
    """Response from snapshot creation."""

    snapshot_uuid: str = Field(..., description="New snapshot UUID")
    project_uuid: str = Field(..., description="Owning project UUID")
    job_id: str = Field(..., description="Capture job ID")
    status: str = Field(..., description="Snapshot status (QUEUED)")


class SnapshotResponse(BaseModel):
    """Response representing a Snapshot."""

    uuid: str
    project_uuid: str
    full_scan: bool
    status: str
    job_id: Optional[str] = None
    created_at: str
    updated_at: str


class SnapshotListResponse(BaseModel):
    """Response for snapshot list endpoint."""

    snapshots: List[SnapshotResponse] = Field(default_factory=list)
    total: int = Field(..., description="Total number of snapshots")
