"""
Project module - monitored targets and their storage.
"""

from .entities import Project, ProjectStatus
from .repository import FilesystemProjectRepository, ProjectRepository
from .service import ProjectService

__all__ = [
    "Project",
    "ProjectStatus",
    "ProjectRepository",
    "FilesystemProjectRepository",
    "ProjectService",
]
