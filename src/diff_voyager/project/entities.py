"""
Project entity.

A Project is a monitored target: a unique human-chosen name plus the URL to
capture. Project.create is the validating constructor; Project.restore
rebuilds a project from a trusted stored record without validation.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from diff_voyager.errors import ValidationError
from diff_voyager.infra.identifiers import from_iso, generate_uuid, to_iso, utc_now


MAX_NAME_LENGTH = 100
NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
ALLOWED_URL_SCHEMES = ("http", "https")


class ProjectStatus(str, Enum):
    """Project status values."""

    CREATED = "CREATED"
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


def validate_name(name: Any) -> str:
    """
    Validate a project name.

    Raises:
        ValidationError: rule "required", "length" or "charset"
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name", "required", "Name is required")

    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            "name", "length", f"Name must be {MAX_NAME_LENGTH} characters or less"
        )

    if not NAME_PATTERN.fullmatch(name):
        raise ValidationError(
            "name",
            "charset",
            "Name must be alphanumeric with dashes and underscores only",
        )

    return name


def validate_url(url: Any) -> str:
    """
    Validate a project URL.

    Raises:
        ValidationError: rule "format" or "scheme"
    """
    if not isinstance(url, str) or not url.strip() or url != url.strip():
        raise ValidationError("url", "format", "Invalid URL format")

    try:
        parsed = urlsplit(url)
        # Accessing port validates it
        parsed.port
    except ValueError:
        raise ValidationError("url", "format", "Invalid URL format")

    if not parsed.scheme:
        raise ValidationError("url", "format", "Invalid URL format")

    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise ValidationError(
            "url", "scheme", "URL must use http or https protocol"
        )

    if not parsed.hostname or any(ch.isspace() for ch in parsed.netloc):
        raise ValidationError("url", "format", "Invalid URL format")

    return url


@dataclass
class Project:
    """
    Monitored target under which snapshots are grouped.

    status is driven by whichever subsystem executes the project's
    snapshots; projects are never deleted.
    """

    uuid: str
    name: str
    url: str
    status: ProjectStatus = ProjectStatus.CREATED
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(cls, name: str, url: str) -> "Project":
        """
        Create a new CREATED project with generated ID.

        Name rules are checked before URL rules, each in order:
        required, length, charset, then format, scheme.

        Raises:
            ValidationError: On the first violated rule
        """
        validate_name(name)
        validate_url(url)

        now = utc_now()
        return cls(
            uuid=generate_uuid(),
            name=name,
            url=url,
            status=ProjectStatus.CREATED,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def restore(cls, record: dict[str, Any]) -> "Project":
        """
        Rebuild a project from a trusted stored record.

        Skips validation; every attribute is taken as stored.
        """
        return cls(
            uuid=record["uuid"],
            name=record["name"],
            url=record["url"],
            status=ProjectStatus(record["status"]),
            created_at=from_iso(record["created_at"]),
            updated_at=from_iso(record["updated_at"]),
        )

    def update_status(self, status: ProjectStatus) -> None:
        """Set the status and refresh updated_at."""
        self.status = ProjectStatus(status)
        self.updated_at = max(utc_now(), self.updated_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert project to a JSON-ready record."""
        return {
            "uuid": self.uuid,
            "name": self.name,
            "url": self.url,
            "status": self.status.value,
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }
