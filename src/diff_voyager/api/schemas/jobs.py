"""
Job API schemas.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class JobResponse(BaseModel):
    """Response representing a queued Job."""

    id: str = Field(..., description="Job ID (UUID v7)")
    type: str = Field(..., description="Job type (SNAPSHOT_SINGLE/SNAPSHOT_CRAWL)")
    status: str = Field(..., description="Job status")
    payload: dict = Field(default_factory=dict, description="Job payload")
    retry_count: int = Field(default=0, description="Failed attempts so far")
    max_retries: int = Field(..., description="Retry ceiling")
    last_error: Optional[str] = Field(default=None, description="Most recent failure message")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")
    updated_at: str = Field(..., description="Last update timestamp (ISO format)")


class JobListResponse(BaseModel):
    """Response for job list endpoint."""

    jobs: List[JobResponse] = Field(default_factory=list)
    total: int = Field(..., description="Number of jobs returned")
    counts: Dict[str, int] = Field(default_factory=dict, description="Queue counts per status")
