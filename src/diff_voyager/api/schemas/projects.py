"""
Project API schemas.
"""

from typing import List

from pydantic import BaseModel, Field


class ProjectCreateRequest(BaseModel):
    """Request to register a project."""

    # Empty defaults let the domain validation produce the error message
    name: str = Field(
        default="",
        description="Unique project name (alphanumeric, dashes, underscores; max 100)"
    )
    url: str = Field(
        default="",
        description="Base URL to monitor (http or https)"
    )


class ProjectResponse(BaseModel):
    """Response representing a Project."""

    uuid: str = Field(..., description="Project UUID (v7)")
    name: str = Field(..., description="Project name")
    url: str = Field(..., description="Base URL")
    status: str = Field(..., description="Project status")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")
    updated_at: str = Field(..., description="Last update timestamp (ISO format)")


class ProjectSummary(BaseModel):
    """Compact project entry for list responses."""

    uuid: str
    name: str
    url: str
    status: str


class ProjectListResponse(BaseModel):
    """Response for project list endpoint."""

    projects: List[ProjectSummary] = Field(default_factory=list)
    total: int = Field(..., description="Total number of projects")
