"""Asset and project deletion workflow.

Rows live in the database and blobs in object storage, with no transaction
spanning both. Blob removal is best-effort: a failure is logged, written to
the upload log as ``cleanup_failed`` and skipped so the database cleanup
still runs. The orphaned blobs are picked up by storage reconciliation.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from jewelrydam.models.asset import Asset
from jewelrydam.models.project import Project
from jewelrydam.models.upload_log import UploadLogStatus
from jewelrydam.services.errors import AssetNotFoundError, ProjectNotFoundError
from jewelrydam.services.upload_log_service import record_upload_event
from jewelrydam.storage.base import (
    SECONDARY_EXTENSION,
    BaseStorageDriver,
    asset_id_from_key,
    asset_key,
)

logger = logging.getLogger(__name__)


def asset_blob_keys(asset: Asset) -> List[str]:
    """Object keys holding the blobs of an asset."""
    keys = [asset_key(asset.id)]
    if asset.secondary_image_url:
        keys.append(asset_key(asset.id, SECONDARY_EXTENSION))
    return keys


class DeletionService:
    """Removes assets and projects from both stores."""

    def __init__(self, db: Session, storage: BaseStorageDriver):
        self.db = db
        self.storage = storage

    async def delete_asset(self, asset_id: str) -> None:
        """Delete one asset: blobs first (best-effort), then the row.

        Raises:
            AssetNotFoundError: If asset not found
        """
        asset = self.db.query(Asset).filter(Asset.id == asset_id).first()
        if not asset:
            raise AssetNotFoundError(asset_id)

        failed_keys = await self._remove_blobs([asset])

        try:
            deleted = (
                self.db.query(Asset)
                .filter(Asset.id == asset_id)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                self.db.rollback()
                raise AssetNotFoundError(asset_id)
            self.db.commit()
        except AssetNotFoundError:
            raise
        except Exception:
            self.db.rollback()
            logger.error(f"Failed to delete asset {asset_id}", exc_info=True)
            raise
        finally:
            self._record_cleanup_failures(failed_keys)

        logger.info(f"Deleted asset {asset_id}")

    async def delete_project(self, project_id: str) -> int:
        """Delete a project and every asset referencing it.

        Asset rows are deleted before the project row to satisfy the
        foreign key. All row deletions share one transaction.

        Returns:
            Number of assets deleted

        Raises:
            ProjectNotFoundError: If project not found
        """
        failed_keys: List[str] = []

        try:
            assets = self.db.query(Asset).filter(Asset.project_id == project_id).all()

            failed_keys = await self._remove_blobs(assets)

            asset_count = (
                self.db.query(Asset)
                .filter(Asset.project_id == project_id)
                .delete(synchronize_session=False)
            )
            deleted = (
                self.db.query(Project)
                .filter(Project.id == project_id)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                self.db.rollback()
                raise ProjectNotFoundError(project_id)

            self.db.commit()
        except ProjectNotFoundError:
            raise
        except Exception:
            self.db.rollback()
            logger.error(f"Failed to delete project {project_id}", exc_info=True)
            raise
        finally:
            self._record_cleanup_failures(failed_keys)

        logger.info(f"Deleted project {project_id} with {asset_count} asset(s)")
        return asset_count

    async def _remove_blobs(self, assets: List[Asset]) -> List[str]:
        """Remove blobs for the given assets, continuing past failures.

        Returns:
            Keys that could not be removed
        """
        failed: List[str] = []
        for asset in assets:
            for key in asset_blob_keys(asset):
                try:
                    await self.storage.delete_file(key)
                except Exception as e:
                    # best-effort: the row is still deleted, the blob is left orphaned
                    logger.warning(f"best-effort: failed to remove blob {key}: {e}")
                    failed.append(key)
        return failed

    def _record_cleanup_failures(self, keys: List[str]) -> None:
        for key in keys:
            record_upload_event(
                self.db,
                UploadLogStatus.CLEANUP_FAILED,
                f"Blob {key} could not be removed and is orphaned",
                asset_id=asset_id_from_key(key),
            )
