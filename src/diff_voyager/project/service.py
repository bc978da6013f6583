"""
Project service: create / get / list for the API layer.
"""

import logging
import threading
from typing import Optional

from diff_voyager.errors import DuplicateProjectError

from .entities import Project
from .repository import ProjectRepository


logger = logging.getLogger(__name__)


class ProjectService:
    """Translates project requests into entity construction and storage."""

    def __init__(self, repository: ProjectRepository):
        self.repository = repository
        # Serializes the name uniqueness check with the save
        self._create_lock = threading.Lock()

    def create(self, name: str, url: str) -> Project:
        """
        Create and persist a project.

        Raises:
            ValidationError: If name or url is invalid
            DuplicateProjectError: If the name is already taken
        """
        project = Project.create(name=name, url=url)

        with self._create_lock:
            if self.repository.find_by_name(project.name) is not None:
                raise DuplicateProjectError(project.name)
            self.repository.save(project)

        logger.info(f"Created project {project.uuid} ({project.name}) for {project.url}")
        return project

    def find_by_identifier(self, identifier: str) -> Optional[Project]:
        """Look a project up by UUID, falling back to name."""
        project = self.repository.find_by_uuid(identifier)
        if project is None:
            project = self.repository.find_by_name(identifier)
        return project

    def list_all(self) -> list[Project]:
        return self.repository.list_all()
