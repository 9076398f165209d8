"""Asset ingestion workflow.

An upload batch is one or more image files plus shared metadata. Each file
is stored in object storage under ``assets/<id>.jpg`` and only then
recorded as an asset row. Files are processed strictly in order; the first
object storage failure aborts the batch. Assets committed before the
failure are kept and reported back with the error.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from pathlib import PurePath
from typing import Dict, List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from jewelrydam.models.asset import Asset
from jewelrydam.models.project import Project
from jewelrydam.models.upload_log import UploadLogStatus
from jewelrydam.schemas.asset import IngestedAsset
from jewelrydam.services.errors import IngestionError, InvalidRequestError
from jewelrydam.services.project_service import find_or_create_project
from jewelrydam.services.upload_log_service import record_upload_event
from jewelrydam.storage.base import (
    SECONDARY_EXTENSION,
    BaseStorageDriver,
    asset_key,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
GENERIC_CONTENT_TYPE = "application/octet-stream"
TIFF_CONTENT_TYPE = "image/tiff"


@dataclass
class IngestionMetadata:
    """Metadata shared by every file of an upload batch."""

    project_id: Optional[str] = None
    project_name: Optional[str] = None
    project_date: Optional[date] = None
    client_name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[str] = None


def to_ingested_asset(asset: Asset) -> IngestedAsset:
    """Project an asset row onto the upload response shape."""
    return IngestedAsset(
        id=asset.id,
        name=asset.name,
        url=asset.primary_image_url,
        secondary_url=asset.secondary_image_url,
        project_id=asset.project_id,
        project_name=asset.project_name,
        project_date=asset.project_date,
        client_name=asset.client_name,
    )


def _stem(filename: Optional[str]) -> str:
    return PurePath(filename or "").stem


def _declared_content_type(image: UploadFile) -> str:
    # Parts sent without a type arrive untyped or as octet-stream
    content_type = image.content_type
    if not content_type or content_type == GENERIC_CONTENT_TYPE:
        return DEFAULT_IMAGE_CONTENT_TYPE
    return content_type


class IngestionService:
    """Stores uploaded images and records them as assets."""

    def __init__(self, db: Session, storage: BaseStorageDriver):
        self.db = db
        self.storage = storage

    def resolve_project(self, metadata: IngestionMetadata) -> Optional[Project]:
        """Resolve the owning project: by ID, else find-or-create by name, else none.

        Raises:
            InvalidRequestError: If project_id does not exist
        """
        if metadata.project_id:
            project = self.db.query(Project).filter(Project.id == metadata.project_id).first()
            if not project:
                raise InvalidRequestError(f"Project {metadata.project_id} does not exist")
            return project

        if metadata.project_name:
            project, _ = find_or_create_project(
                self.db, metadata.project_name, project_date=metadata.project_date
            )
            return project

        return None

    @staticmethod
    def pair_secondary_files(
        images: List[UploadFile], tiffs: Optional[List[UploadFile]]
    ) -> Dict[int, UploadFile]:
        """Match each TIFF to the image with the same filename stem.

        Returns:
            Mapping of image index to its TIFF

        Raises:
            InvalidRequestError: If a TIFF has no matching image
        """
        pairs: Dict[int, UploadFile] = {}
        if not tiffs:
            return pairs

        index_by_stem = {_stem(image.filename): idx for idx, image in enumerate(images)}
        for tiff in tiffs:
            idx = index_by_stem.get(_stem(tiff.filename))
            if idx is None:
                raise InvalidRequestError(
                    f"High-resolution file {tiff.filename} has no matching image"
                )
            pairs[idx] = tiff
        return pairs

    async def ingest(
        self,
        images: List[UploadFile],
        metadata: IngestionMetadata,
        tiffs: Optional[List[UploadFile]] = None,
    ) -> List[Asset]:
        """Ingest an upload batch.

        Args:
            images: Primary image files, at least one
            metadata: Shared project/client metadata
            tiffs: Optional high-resolution files paired by filename stem

        Returns:
            Created assets, in upload order

        Raises:
            InvalidRequestError: If no files were sent or metadata is invalid
            IngestionError: If object storage failed; carries committed assets
        """
        if not images:
            raise InvalidRequestError("At least one image is required")

        secondary = self.pair_secondary_files(images, tiffs)
        project = self.resolve_project(metadata)

        project_date = metadata.project_date
        if project_date is None and project is not None:
            project_date = project.project_date

        logger.info(
            f"Ingesting {len(images)} file(s) into project "
            f"{project.id if project else '<none>'}"
        )

        created: List[Asset] = []
        for idx, image in enumerate(images):
            asset = await self._ingest_one(
                image,
                secondary.get(idx),
                project=project,
                project_date=project_date,
                metadata=metadata,
                committed=created,
            )
            created.append(asset)

        return created

    async def _ingest_one(
        self,
        image: UploadFile,
        tiff: Optional[UploadFile],
        project: Optional[Project],
        project_date: Optional[date],
        metadata: IngestionMetadata,
        committed: List[Asset],
    ) -> Asset:
        asset_id = str(uuid.uuid4())
        filename = image.filename or f"{asset_id}.jpg"
        primary_key = asset_key(asset_id)
        secondary_key = asset_key(asset_id, SECONDARY_EXTENSION) if tiff else None

        record_upload_event(
            self.db, UploadLogStatus.STARTED, f"Upload started for {filename}", asset_id=asset_id
        )

        try:
            content = await image.read()
            await self.storage.upload_file(
                primary_key, content, _declared_content_type(image)
            )
        except Exception as e:
            raise self._failure(asset_id, filename, e, committed) from e

        if tiff is not None:
            try:
                tiff_content = await tiff.read()
                await self.storage.upload_file(secondary_key, tiff_content, TIFF_CONTENT_TYPE)
            except Exception as e:
                await self._discard_blob(primary_key)
                raise self._failure(asset_id, tiff.filename or filename, e, committed) from e

        record_upload_event(
            self.db, UploadLogStatus.UPLOADED, f"Upload succeeded for {filename}", asset_id=asset_id
        )

        asset = Asset(
            id=asset_id,
            name=filename,
            description=metadata.description,
            tags=metadata.tags,
            project_id=project.id if project else None,
            project_name=project.name if project else None,
            project_date=project_date,
            client_name=metadata.client_name,
            primary_image_url=self.storage.get_public_url(primary_key),
            secondary_image_url=self.storage.get_public_url(secondary_key) if secondary_key else None,
        )
        self.db.add(asset)
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            for key in filter(None, (primary_key, secondary_key)):
                await self._discard_blob(key)
            raise self._failure(
                asset_id, filename, e, committed, action="record asset for"
            ) from e
        self.db.refresh(asset)

        record_upload_event(
            self.db, UploadLogStatus.COMMITTED, f"Asset record created for {filename}", asset_id=asset_id
        )

        await image.close()
        if tiff is not None:
            await tiff.close()

        logger.info(f"Ingested {filename} as asset {asset_id}")
        return asset

    def _failure(
        self,
        asset_id: str,
        filename: str,
        error: Exception,
        committed: List[Asset],
        action: str = "upload",
    ) -> IngestionError:
        """Record a failed upload and build the error that aborts the batch."""
        logger.error(f"Failed to {action} {filename}: {error}", exc_info=True)
        record_upload_event(
            self.db,
            UploadLogStatus.FAILED,
            f"Upload failed for {filename}: {error}",
            asset_id=asset_id,
        )
        return IngestionError(
            f"Failed to {action} {filename}",
            details=str(error),
            committed=list(committed),
        )

    async def _discard_blob(self, key: str) -> None:
        """Best-effort removal of a blob whose asset will not be recorded."""
        try:
            await self.storage.delete_file(key)
        except Exception as e:
            logger.warning(f"best-effort: could not remove {key} after failed upload: {e}")
