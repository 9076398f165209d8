"""Upload audit trail."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jewelrydam.models.upload_log import UploadLog

logger = logging.getLogger(__name__)

RECENT_LOG_LIMIT = 50


def record_upload_event(
    db: Session,
    status: str,
    message: str,
    asset_id: Optional[str] = None,
) -> UploadLog:
    """Append an entry to the upload log and commit it.

    Entries are committed immediately so the trail survives a later failure
    in the same request.

    Args:
        db: Database session
        status: Status tag (see UploadLogStatus)
        message: Human-readable message
        asset_id: Asset the entry refers to, if any
    """
    entry = UploadLog(message=message, asset_id=asset_id, status=status)
    db.add(entry)
    db.commit()
    logger.debug(f"Upload log [{status}] {message}")
    return entry


def list_recent_upload_events(db: Session, limit: int = RECENT_LOG_LIMIT) -> List[UploadLog]:
    """Return the most recent upload log entries, newest first."""
    return (
        db.query(UploadLog)
        .order_by(UploadLog.timestamp.desc())
        .limit(limit)
        .all()
    )
