"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .projects import (
    ProjectCreateRequest,
    ProjectResponse,
    ProjectSummary,
    ProjectListResponse,
)
from .snapshots import (
    SnapshotCreateRequest,
    SnapshotCreateResponse,
    SnapshotResponse,
    SnapshotListResponse,
)
from .jobs import (
    JobResponse,
    JobListResponse,
)

__all__ = [
    "ProjectCreateRequest",
    "ProjectResponse",
    "ProjectSummary",
    "ProjectListResponse",
    "SnapshotCreateRequest",
    "SnapshotCreateResponse",
    "SnapshotResponse",
    "SnapshotListResponse",
    "JobResponse",
    "JobListResponse",
]
