"""
Snapshot repositories.

Layout under the data directory:
    projects/<project_uuid>/snapshots/<uuid>/index.json
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Protocol

from diff_voyager.infra.filesystem import read_json, write_json

from .entities import Snapshot


logger = logging.getLogger(__name__)


def _is_path_segment(value: str) -> bool:
    return bool(value) and "/" not in value and "\\" not in value and value not in (".", "..")


class SnapshotRepository(Protocol):
    """Storage contract for snapshots, scoped by project."""

    def save(self, project_uuid: str, snapshot: Snapshot) -> None:
        ...

    def find_by_uuid(self, project_uuid: str, snapshot_uuid: str) -> Optional[Snapshot]:
        ...

    def list_by_project(self, project_uuid: str) -> list[Snapshot]:
        ...


class FilesystemSnapshotRepository:
    """JSON-file snapshot storage nested under each project directory."""

    def __init__(self, base_dir: str | Path):
        self.projects_dir = Path(base_dir) / "projects"
        self._lock = threading.Lock()

    def _snapshots_dir(self, project_uuid: str) -> Path:
        return self.projects_dir / project_uuid / "snapshots"

    def save(self, project_uuid: str, snapshot: Snapshot) -> None:
        """Write the snapshot record, replacing any previous version."""
        if not _is_path_segment(project_uuid):
            raise ValueError(f"Invalid project identifier: {project_uuid!r}")

        index_file = self._snapshots_dir(project_uuid) / snapshot.uuid / "index.json"
        with self._lock:
            write_json(index_file, snapshot.to_dict())

    def find_by_uuid(self, project_uuid: str, snapshot_uuid: str) -> Optional[Snapshot]:
        if not (_is_path_segment(project_uuid) and _is_path_segment(snapshot_uuid)):
            return None

        data = read_json(self._snapshots_dir(project_uuid) / snapshot_uuid / "index.json")
        if data is None:
            return None
        return self._hydrate(data)

    def list_by_project(self, project_uuid: str) -> list[Snapshot]:
        """List a project's readable snapshots, oldest first."""
        if not _is_path_segment(project_uuid):
            return []

        snapshots_dir = self._snapshots_dir(project_uuid)
        if not snapshots_dir.exists():
            return []

        snapshots = []
        for snapshot_dir in snapshots_dir.iterdir():
            if not snapshot_dir.is_dir():
                continue
            data = read_json(snapshot_dir / "index.json")
            if data is None:
                continue
            snapshot = self._hydrate(data)
            if snapshot is not None:
                snapshots.append(snapshot)

        snapshots.sort(key=lambda s: (s.created_at, s.uuid))
        return snapshots

    def _hydrate(self, data: dict) -> Optional[Snapshot]:
        try:
            return Snapshot.restore(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed snapshot record {data.get('uuid')}: {e}")
            return None
