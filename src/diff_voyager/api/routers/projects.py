"""
Projects router.

- POST /api/projects - Register a project
- GET /api/projects - List projects
- GET /api/projects/{identifier} - Get a project by UUID or name
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from diff_voyager.app import Application
from diff_voyager.errors import DuplicateProjectError, ValidationError
from diff_voyager.project import Project

from ..dependencies import get_application
from ..schemas.projects import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectSummary,
)


logger = logging.getLogger(__name__)

router = APIRouter()


def _project_to_response(project: Project) -> ProjectResponse:
    """Convert Project entity to API response."""
    return ProjectResponse(**project.to_dict())


# Route handlers are sync: repositories do blocking file I/O, so FastAPI
# runs them in its threadpool.


@router.post("/projects", response_model=ProjectResponse, status_code=201)
def create_project(
    request: ProjectCreateRequest,
    application: Application = Depends(get_application),
):
    """
    Register a new project.

    Returns 400 when the name or URL is rejected, 409 when the name exists.
    """
    try:
        project = application.project_service.create(name=request.name, url=request.url)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateProjectError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _project_to_response(project)


@router.get("/projects", response_model=ProjectListResponse)
def list_projects(application: Application = Depends(get_application)):
    """List all projects, oldest first."""
    projects = application.project_service.list_all()
    return ProjectListResponse(
        projects=[
            ProjectSummary(
                uuid=p.uuid, name=p.name, url=p.url, status=p.status.value
            )
            for p in projects
        ],
        total=len(projects),
    )


@router.get("/projects/{identifier}", response_model=ProjectResponse)
def get_project(identifier: str, application: Application = Depends(get_application)):
    """Get a project by UUID, falling back to name."""
    project = application.project_service.find_by_identifier(identifier)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project not found: {identifier}")
    return _project_to_response(project)
