"""
Jobs router for the in-memory job queue.

- GET /api/jobs - List jobs, optionally filtered by status
- GET /api/jobs/{job_id} - Get job details
- POST /api/jobs/{job_id}/cancel - Cancel a PENDING or RETRYING job
- POST /api/jobs/{job_id}/requeue - Re-admit a RETRYING job held for requeue
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from diff_voyager.app import Application
from diff_voyager.scheduler import InvalidOperationError, Job, JobNotFoundError, JobStatus

from ..dependencies import get_application
from ..schemas.jobs import JobListResponse, JobResponse


router = APIRouter()


def _job_to_response(job: Job) -> JobResponse:
    """Convert scheduler Job entity to API response."""
    return JobResponse(**job.to_dict())


@router.get("", response_model=JobListResponse)
async def list_jobs(
    status: Optional[JobStatus] = Query(default=None, description="Filter by job status"),
    application: Application = Depends(get_application),
):
    """List queued jobs in admission order, with per-status counts."""
    jobs = application.queue.list_jobs(status=status)
    return JobListResponse(
        jobs=[_job_to_response(job) for job in jobs],
        total=len(jobs),
        counts=application.queue.count_by_status(),
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, application: Application = Depends(get_application)):
    """Get a specific job by ID."""
    job = application.queue.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Job not found: {job_id}")
    return _job_to_response(job)


@router.post("/{job_id}/cancel", response_model=JobResponse)
def cancel_job(job_id: str, application: Application = Depends(get_application)):
    """
    Cancel a job that has not started yet.

    RUNNING jobs cannot be cancelled (no preemption) and return 409. The
    job's snapshot is marked FAILED and its project CANCELLED.
    """
    try:
        job = application.worker.cancel(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOperationError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _job_to_response(job)


@router.post("/{job_id}/requeue", response_model=JobResponse)
async def requeue_job(job_id: str, application: Application = Depends(get_application)):
    """
    Re-admit a RETRYING job at the tail of the queue.

    Used when REQUEUE_RETRIES is false and retried jobs are held.
    """
    try:
        job = application.queue.requeue(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOperationError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _job_to_response(job)
