"""Project endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jewelrydam.api.deps import get_db, get_deletion_service
from jewelrydam.schemas.asset import AssetResponse, MessageResponse
from jewelrydam.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectSummary,
    ProjectUpdate,
)
from jewelrydam.services import asset_service, project_service
from jewelrydam.services.deletion_service import DeletionService
from jewelrydam.services.errors import DuplicateProjectError, ProjectNotFoundError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[ProjectSummary])
def list_projects(db: Session = Depends(get_db)):
    """
    List all projects, newest first.

    Each project carries its asset count, latest image and upload dates.
    """
    try:
        return project_service.list_projects_with_summary(db)
    except Exception as e:
        logger.error(f"List projects failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch projects", "details": str(e)},
        )


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new project.

    - **name**: Project name (required, unique)
    - **description**: Optional description
    - **project_date**: Optional date
    """
    try:
        return project_service.create_project(db, project_data)
    except DuplicateProjectError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{project_id}", response_model=ProjectDetail)
def get_project(project_id: str, db: Session = Depends(get_db)):
    """Get project with its assets grouped by upload date."""
    try:
        return project_service.get_project_detail(db, project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{project_id}/assets", response_model=List[AssetResponse])
def list_project_assets(project_id: str, db: Session = Depends(get_db)):
    """List assets of a project, newest first. Unknown projects have none."""
    return asset_service.list_assets(db, project_id=project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    db: Session = Depends(get_db),
):
    """
    Update project.

    All fields are optional. Renaming also updates the project name shown
    on its assets.
    """
    try:
        return project_service.update_project(db, project_id, project_data)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateProjectError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    service: DeletionService = Depends(get_deletion_service),
):
    """Delete a project together with all of its assets and their images."""
    try:
        await service.delete_project(project_id)
        return MessageResponse(message="Project deleted successfully")
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Delete project {project_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete project", "details": str(e)},
        )
