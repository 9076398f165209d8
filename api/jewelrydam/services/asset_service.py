"""Asset business logic service."""

import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from jewelrydam.models.asset import Asset
from jewelrydam.models.project import Project
from jewelrydam.schemas.asset import AssetUpdate
from jewelrydam.services.errors import AssetNotFoundError, InvalidRequestError

logger = logging.getLogger(__name__)

RECENT_ASSET_LIMIT = 10


def list_assets(db: Session, project_id: Optional[str] = None) -> List[Asset]:
    """List assets newest first, optionally filtered by project."""
    query = db.query(Asset)

    if project_id:
        query = query.filter(Asset.project_id == project_id)

    return query.order_by(Asset.created_at.desc()).all()


def list_recent_assets(db: Session, limit: int = RECENT_ASSET_LIMIT) -> List[Asset]:
    """List the most recently created assets."""
    return db.query(Asset).order_by(Asset.created_at.desc()).limit(limit).all()


def get_asset(db: Session, asset_id: str) -> Asset:
    """
    Get asset by ID.

    Raises:
        AssetNotFoundError: If asset not found
    """
    asset = db.query(Asset).filter(Asset.id == asset_id).first()

    if not asset:
        raise AssetNotFoundError(asset_id)

    return asset


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_assets(db: Session, term: str) -> List[Asset]:
    """Search assets by case-insensitive substring.

    Matches name, description, tags, client name, the denormalized project
    name, and the current name of the linked project. A blank term matches
    nothing.

    Examples:
        >>> [a.name for a in search_assets(db, "spring")]
        ['ring01.jpg', 'ring02.jpg']
    """
    term = (term or "").strip()
    if not term:
        return []

    pattern = f"%{_escape_like(term)}%"

    return (
        db.query(Asset)
        .outerjoin(Project, Asset.project_id == Project.id)
        .filter(
            or_(
                Asset.name.ilike(pattern, escape="\\"),
                Asset.description.ilike(pattern, escape="\\"),
                Asset.tags.ilike(pattern, escape="\\"),
                Asset.project_name.ilike(pattern, escape="\\"),
                Asset.client_name.ilike(pattern, escape="\\"),
                Project.name.ilike(pattern, escape="\\"),
            )
        )
        .order_by(Asset.created_at.desc())
        .all()
    )


def update_asset(db: Session, asset_id: str, data: AssetUpdate) -> Asset:
    """Update asset metadata fields present in the request.

    Changing ``project_id`` re-denormalizes ``project_name`` from the
    project row; ``project_name`` in the request is ignored when a
    ``project_id`` is given.

    Raises:
        AssetNotFoundError: If asset not found
        InvalidRequestError: If the target project does not exist
    """
    asset = get_asset(db, asset_id)
    fields = data.model_fields_set

    if "name" in fields and data.name is not None:
        asset.name = data.name
    if "description" in fields:
        asset.description = data.description
    if "tags" in fields:
        asset.tags = data.tags
    if "client_name" in fields:
        asset.client_name = data.client_name
    if "project_date" in fields:
        asset.project_date = data.project_date

    if "project_id" in fields:
        if data.project_id:
            project = db.query(Project).filter(Project.id == data.project_id).first()
            if not project:
                raise InvalidRequestError(f"Project {data.project_id} does not exist")
            asset.project_id = project.id
            asset.project_name = project.name
            if "project_date" not in fields and project.project_date is not None:
                asset.project_date = project.project_date
        else:
            asset.project_id = None
            asset.project_name = None
    elif "project_name" in fields and asset.project_id is None:
        # Free-text label for assets outside any project
        asset.project_name = data.project_name

    db.commit()
    db.refresh(asset)
    logger.info(f"Updated asset {asset.id}")
    return asset
