"""
Project repositories.

Layout under the data directory:
    projects/<uuid>/project.json
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Protocol

from diff_voyager.infra.filesystem import read_json, write_json

from .entities import Project


logger = logging.getLogger(__name__)


class ProjectRepository(Protocol):
    """Storage contract for projects. Absence is None, never an error."""

    def save(self, project: Project) -> None:
        ...

    def find_by_uuid(self, uuid: str) -> Optional[Project]:
        ...

    def find_by_name(self, name: str) -> Optional[Project]:
        ...

    def list_all(self) -> list[Project]:
        ...


class FilesystemProjectRepository:
    """JSON-file project storage, one directory per project."""

    def __init__(self, base_dir: str | Path):
        self.projects_dir = Path(base_dir) / "projects"
        self._lock = threading.Lock()

    def _project_file(self, uuid: str) -> Path:
        return self.projects_dir / uuid / "project.json"

    def save(self, project: Project) -> None:
        """Write the project record, replacing any previous version."""
        with self._lock:
            write_json(self._project_file(project.uuid), project.to_dict())

    def find_by_uuid(self, uuid: str) -> Optional[Project]:
        # Identifiers come from URLs; refuse anything that is not one path segment
        if not uuid or "/" in uuid or "\\" in uuid or uuid in (".", ".."):
            return None

        data = read_json(self._project_file(uuid))
        if data is None:
            return None
        return self._hydrate(data)

    def find_by_name(self, name: str) -> Optional[Project]:
        for project in self.list_all():
            if project.name == name:
                return project
        return None

    def list_all(self) -> list[Project]:
        """List all readable projects, oldest first."""
        if not self.projects_dir.exists():
            return []

        projects = []
        for project_dir in self.projects_dir.iterdir():
            if not project_dir.is_dir():
                continue
            data = read_json(project_dir / "project.json")
            if data is None:
                continue
            project = self._hydrate(data)
            if project is not None:
                projects.append(project)

        projects.sort(key=lambda p: (p.created_at, p.uuid))
        return projects

    def _hydrate(self, data: dict) -> Optional[Project]:
        try:
            return Project.restore(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed project record {data.get('uuid')}: {e}")
            return None
