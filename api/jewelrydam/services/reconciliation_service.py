"""Object storage reconciliation.

Finds blobs under ``assets/`` whose asset row no longer exists. These are
left behind by best-effort blob removal during deletion, and by uploads
whose database insert failed after the blob was stored.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Set, Tuple

from sqlalchemy.orm import Session

from jewelrydam.models.asset import Asset
from jewelrydam.storage.base import ASSET_PREFIX, BaseStorageDriver, FileInfo, asset_id_from_key

logger = logging.getLogger(__name__)

# Blobs younger than this may belong to an upload still in flight
DEFAULT_GRACE_PERIOD = timedelta(minutes=10)
ID_CHUNK_SIZE = 500


def _age(file_info: FileInfo) -> timedelta:
    modified_at = file_info.modified_at
    if modified_at is None:
        return timedelta.max
    if modified_at.tzinfo is None:
        return datetime.now() - modified_at
    return datetime.now(timezone.utc) - modified_at


def _existing_asset_ids(db: Session, asset_ids: List[str]) -> Set[str]:
    existing: Set[str] = set()
    for start in range(0, len(asset_ids), ID_CHUNK_SIZE):
        chunk = asset_ids[start : start + ID_CHUNK_SIZE]
        rows = db.query(Asset.id).filter(Asset.id.in_(chunk)).all()
        existing.update(row[0] for row in rows)
    return existing


async def find_orphaned_blobs(
    db: Session,
    storage: BaseStorageDriver,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> Tuple[int, List[str]]:
    """List asset blobs with no matching asset row.

    Args:
        db: Database session
        storage: Storage driver
        grace_period: Skip blobs modified more recently than this

    Returns:
        Tuple of (number of blobs scanned, orphaned keys)
    """
    files = await storage.list_files(ASSET_PREFIX)

    candidates: Dict[str, List[str]] = {}
    for file_info in files:
        key = file_info.path
        asset_id = asset_id_from_key(key)
        if asset_id is None:
            logger.debug(f"Skipping non-asset key {key}")
            continue
        if _age(file_info) < grace_period:
            continue
        candidates.setdefault(asset_id, []).append(key)

    existing = _existing_asset_ids(db, list(candidates))

    orphaned = sorted(
        key
        for asset_id, keys in candidates.items()
        if asset_id not in existing
        for key in keys
    )
    return len(files), orphaned


async def reconcile_storage(
    db: Session,
    storage: BaseStorageDriver,
    delete: bool = False,
    grace_period: timedelta = DEFAULT_GRACE_PERIOD,
) -> Dict[str, Any]:
    """Report orphaned blobs and optionally remove them.

    Returns:
        Dict with scanned, orphaned, deleted and errors
    """
    scanned, orphaned = await find_orphaned_blobs(db, storage, grace_period=grace_period)

    logger.info(f"Reconciliation scanned {scanned} blob(s), {len(orphaned)} orphaned")

    deleted: List[str] = []
    errors: List[str] = []
    if delete:
        for key in orphaned:
            try:
                await storage.delete_file(key)
                deleted.append(key)
            except Exception as e:
                logger.warning(f"Failed to remove orphaned blob {key}: {e}")
                errors.append(f"{key}: {e}")

    return {
        "scanned": scanned,
        "orphaned": orphaned,
        "deleted": deleted,
        "errors": errors[:10],
    }
