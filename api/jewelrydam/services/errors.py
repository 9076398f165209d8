"""Service layer exceptions."""

from typing import Any, List, Optional


class DamServiceError(Exception):
    """Base exception for service errors."""
    pass


class InvalidRequestError(DamServiceError):
    """Request is missing or has invalid fields."""
    pass


class NotFoundError(DamServiceError):
    """Targeted record does not exist."""
    pass


class AssetNotFoundError(NotFoundError):
    """Asset not found."""

    def __init__(self, asset_id: str):
        super().__init__(f"Asset {asset_id} not found")
        self.asset_id = asset_id


class ProjectNotFoundError(NotFoundError):
    """Project not found."""

    def __init__(self, project_id: str):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class DuplicateProjectError(DamServiceError):
    """A project with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(f"Project with name '{name}' already exists")
        self.name = name


class IngestionError(DamServiceError):
    """Upload batch aborted on an object storage failure.

    Assets committed before the failing file stay committed and are
    carried in ``committed``.
    """

    def __init__(self, message: str, details: Optional[str] = None, committed: Optional[List[Any]] = None):
        super().__init__(message)
        self.details = details
        self.committed = committed or []
