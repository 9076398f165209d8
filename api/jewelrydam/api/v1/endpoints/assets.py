"""Asset endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from jewelrydam.api.deps import get_db, get_deletion_service, get_ingestion_service
from jewelrydam.schemas.asset import (
    AssetResponse,
    AssetUpdate,
    AssetUploadResponse,
    MessageResponse,
)
from jewelrydam.schemas.common import normalize_tags, parse_date
from jewelrydam.services import asset_service
from jewelrydam.services.deletion_service import DeletionService
from jewelrydam.services.errors import (
    AssetNotFoundError,
    IngestionError,
    InvalidRequestError,
)
from jewelrydam.services.ingestion_service import (
    IngestionMetadata,
    IngestionService,
    to_ingested_asset,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[AssetResponse])
def list_assets(
    project_id: Optional[str] = Query(None, description="Only assets of this project"),
    db: Session = Depends(get_db),
):
    """List all assets, newest first."""
    try:
        return asset_service.list_assets(db, project_id=project_id)
    except Exception as e:
        logger.error(f"List assets failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch assets", "details": str(e)},
        )


@router.post("", response_model=AssetUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_assets(
    images: Optional[List[UploadFile]] = File(None, description="Image files"),
    tiffs: Optional[List[UploadFile]] = File(None, description="High-resolution TIFFs, matched to images by filename"),
    project_id: Optional[str] = Form(None, alias="projectId"),
    project_name: Optional[str] = Form(None, alias="projectName"),
    project_date: Optional[str] = Form(None, alias="projectDate"),
    client_name: Optional[str] = Form(None, alias="clientName"),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    service: IngestionService = Depends(get_ingestion_service),
):
    """Upload one or more images.

    - Resolves the project by **projectId**, or finds/creates it by **projectName**
    - Stores each image under `assets/<id>.jpg` and records an asset
    - Aborts on the first object storage failure; earlier files stay committed
    """
    if not images:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one image is required",
        )

    try:
        metadata = IngestionMetadata(
            project_id=(project_id or "").strip() or None,
            project_name=(project_name or "").strip() or None,
            project_date=parse_date(project_date),
            client_name=(client_name or "").strip() or None,
            description=description,
            tags=normalize_tags(tags),
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        assets = await service.ingest(images, metadata, tiffs=tiffs)

        return AssetUploadResponse(
            message="Assets created successfully",
            assets=[to_ingested_asset(asset) for asset in assets],
        )

    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except IngestionError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": str(e),
                "details": e.details,
                "assets": [to_ingested_asset(asset).model_dump(mode="json") for asset in e.committed],
            },
        )
    except Exception as e:
        logger.error(f"Unexpected error in upload_assets: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create assets", "details": str(e)},
        )


@router.get("/recent", response_model=List[AssetResponse])
def list_recent_assets(
    limit: int = Query(asset_service.RECENT_ASSET_LIMIT, description="Maximum results", ge=1, le=100),
    db: Session = Depends(get_db),
):
    """List the most recently uploaded assets."""
    try:
        return asset_service.list_recent_assets(db, limit=limit)
    except Exception as e:
        logger.error(f"List recent assets failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch recent assets", "details": str(e)},
        )


@router.get("/search", response_model=List[AssetResponse])
def search_assets(
    q: str = Query("", description="Text to search for"),
    db: Session = Depends(get_db),
):
    """Search assets by name, description, tags, project or client.

    Case-insensitive substring match; any field may match.
    """
    try:
        return asset_service.search_assets(db, q)
    except Exception as e:
        logger.error(f"Search failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Search failed", "details": str(e)},
        )


@router.get("/{asset_id}", response_model=AssetResponse)
def get_asset(asset_id: str, db: Session = Depends(get_db)):
    """Get asset by ID."""
    try:
        return asset_service.get_asset(db, asset_id)
    except AssetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{asset_id}", response_model=AssetResponse)
def update_asset(
    asset_id: str,
    asset_data: AssetUpdate,
    db: Session = Depends(get_db),
):
    """
    Update asset metadata.

    All fields are optional. Only provided fields will be updated.
    """
    try:
        return asset_service.update_asset(db, asset_id, asset_data)
    except AssetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Update asset {asset_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update asset", "details": str(e)},
        )


@router.delete("/{asset_id}", response_model=MessageResponse)
async def delete_asset(
    asset_id: str,
    service: DeletionService = Depends(get_deletion_service),
):
    """Delete an asset and its stored image."""
    try:
        await service.delete_asset(asset_id)
        return MessageResponse(message="Asset deleted successfully")
    except AssetNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Delete asset {asset_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete asset", "details": str(e)},
        )
