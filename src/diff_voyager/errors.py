"""
Domain exceptions shared across the project, snapshot and scheduler modules.

Scheduler-specific exceptions live in diff_voyager.scheduler.errors and
derive from DiffVoyagerError as well.
"""


class DiffVoyagerError(Exception):
    """Base exception for all Diff Voyager errors."""
    pass


class ValidationError(DiffVoyagerError):
    """
    Raised when entity construction rejects its input.

    Attributes:
        field: Name of the rejected attribute ("name", "url")
        rule: Short identifier of the violated rule
    """

    def __init__(self, field: str, rule: str, message: str):
        self.field = field
        self.rule = rule
        super().__init__(message)


class InvalidTransitionError(DiffVoyagerError):
    """Raised when a status change would leave a terminal state."""

    def __init__(self, entity: str, from_status: str, to_status: str):
        self.entity = entity
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Illegal {entity} transition: {from_status} -> {to_status}"
        )


class ProjectNotFoundError(DiffVoyagerError):
    """Raised when a project identifier resolves to nothing."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Project not found: {identifier}")


class DuplicateProjectError(DiffVoyagerError):
    """Raised when a project name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Project name already exists: {name}")
