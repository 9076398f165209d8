"""Project business logic service."""

import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jewelrydam.models.asset import Asset
from jewelrydam.models.project import Project
from jewelrydam.schemas.project import ProjectCreate, ProjectUpdate
from jewelrydam.services.errors import DuplicateProjectError, ProjectNotFoundError

logger = logging.getLogger(__name__)


def get_project(db: Session, project_id: str) -> Project:
    """
    Get project by ID.

    Raises:
        ProjectNotFoundError: If project not found
    """
    project = db.query(Project).filter(Project.id == project_id).first()

    if not project:
        raise ProjectNotFoundError(project_id)

    return project


def get_project_by_name(db: Session, name: str) -> Optional[Project]:
    """Find project by exact (case-sensitive) name."""
    return db.query(Project).filter(Project.name == name).first()


def create_project(db: Session, data: ProjectCreate) -> Project:
    """Create a project.

    The name pre-check gives a friendly error; the unique constraint catches
    a concurrent insert of the same name.

    Raises:
        DuplicateProjectError: If a project with the same name exists
    """
    if get_project_by_name(db, data.name):
        raise DuplicateProjectError(data.name)

    project = Project(
        name=data.name,
        description=data.description,
        project_date=data.project_date,
    )
    db.add(project)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateProjectError(data.name)

    db.refresh(project)
    logger.info(f"Created project {project.id} ({project.name})")
    return project


def find_or_create_project(
    db: Session, name: str, project_date: Optional[date] = None
) -> Tuple[Project, bool]:
    """Resolve a project by name, creating it when absent.

    Two requests may race to create the same name. The loser hits the
    unique constraint, rolls back and re-reads the winner's row.

    Returns:
        Tuple of (project, created)

    Examples:
        >>> project, created = find_or_create_project(db, "Spring 2024")
        >>> created
        True
        >>> find_or_create_project(db, "Spring 2024")[1]
        False
    """
    existing = get_project_by_name(db, name)
    if existing:
        return existing, False

    project = Project(name=name, project_date=project_date)
    db.add(project)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_project_by_name(db, name)
        if existing is None:
            raise
        logger.info(f"Project '{name}' created concurrently, reusing {existing.id}")
        return existing, False

    db.refresh(project)
    logger.info(f"Created project {project.id} ({project.name}) during upload")
    return project, True


def update_project(db: Session, project_id: str, data: ProjectUpdate) -> Project:
    """Update project fields present in the request.

    Asset rows carry denormalized project name/date, so they are updated
    in the same transaction.

    Raises:
        ProjectNotFoundError: If project not found
        DuplicateProjectError: If the new name belongs to another project
    """
    project = get_project(db, project_id)
    fields = data.model_fields_set
    asset_changes: Dict[str, Any] = {}

    if "name" in fields and data.name is not None and data.name != project.name:
        other = get_project_by_name(db, data.name)
        if other and other.id != project.id:
            raise DuplicateProjectError(data.name)
        project.name = data.name
        asset_changes[Asset.project_name] = data.name

    if "description" in fields:
        project.description = data.description

    if "project_date" in fields:
        project.project_date = data.project_date
        asset_changes[Asset.project_date] = data.project_date

    if asset_changes:
        db.query(Asset).filter(Asset.project_id == project.id).update(
            asset_changes, synchronize_session=False
        )

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateProjectError(data.name)

    db.refresh(project)
    return project


def list_projects_with_summary(db: Session) -> List[Dict[str, Any]]:
    """List projects newest first, enriched with asset statistics.

    Each entry carries ``asset_count``, ``latest_image`` (URL of the newest
    asset) and ``upload_dates`` (distinct upload dates, newest first).
    """
    projects = db.query(Project).order_by(Project.created_at.desc()).all()

    rows = (
        db.query(Asset.project_id, Asset.primary_image_url, Asset.created_at)
        .filter(Asset.project_id.isnot(None))
        .order_by(Asset.created_at.desc())
        .all()
    )

    stats: Dict[str, Dict[str, Any]] = {}
    for project_id, image_url, created_at in rows:
        entry = stats.setdefault(
            project_id, {"asset_count": 0, "latest_image": image_url, "upload_dates": []}
        )
        entry["asset_count"] += 1
        upload_date = created_at.date()
        if upload_date not in entry["upload_dates"]:
            entry["upload_dates"].append(upload_date)

    summaries = []
    for project in projects:
        entry = stats.get(project.id, {})
        summaries.append(
            {
                "id": project.id,
                "name": project.name,
                "description": project.description,
                "project_date": project.project_date,
                "created_at": project.created_at,
                "updated_at": project.updated_at,
                "asset_count": entry.get("asset_count", 0),
                "latest_image": entry.get("latest_image"),
                "upload_dates": entry.get("upload_dates", []),
            }
        )

    return summaries


def get_project_detail(db: Session, project_id: str) -> Dict[str, Any]:
    """Get a project with its assets grouped by upload date (newest first).

    Raises:
        ProjectNotFoundError: If project not found
    """
    project = get_project(db, project_id)

    assets = (
        db.query(Asset)
        .filter(Asset.project_id == project.id)
        .order_by(Asset.created_at.desc())
        .all()
    )

    grouped: "OrderedDict[str, List[Asset]]" = OrderedDict()
    for asset in assets:
        grouped.setdefault(asset.created_at.date().isoformat(), []).append(asset)

    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "project_date": project.project_date,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
        "asset_count": len(assets),
        "assets_by_date": grouped,
    }
