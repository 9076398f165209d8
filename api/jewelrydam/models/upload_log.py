"""Upload log model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from jewelrydam.database import Base


class UploadLogStatus:
    """Status tags written to the upload log."""

    STARTED = "started"
    UPLOADED = "uploaded"
    FAILED = "failed"
    COMMITTED = "committed"
    CLEANUP_FAILED = "cleanup_failed"


class UploadLog(Base):
    """Append-only audit trail of ingestion steps.

    asset_id is not a foreign key: the "started" entry is written before the
    asset row exists and entries outlive deleted assets.
    """

    __tablename__ = "upload_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    message = Column(Text, nullable=False)
    asset_id = Column(String(36), nullable=True, index=True)
    status = Column(String(50), nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<UploadLog(id={self.id}, status={self.status}, asset_id={self.asset_id})>"
