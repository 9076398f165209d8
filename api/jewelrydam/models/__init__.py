"""SQLAlchemy models."""

from jewelrydam.database import Base
from jewelrydam.models.client import Client
from jewelrydam.models.project import Project
from jewelrydam.models.asset import Asset
from jewelrydam.models.upload_log import UploadLog, UploadLogStatus

__all__ = [
    "Base",
    "Client",
    "Project",
    "Asset",
    "UploadLog",
    "UploadLogStatus",
]
