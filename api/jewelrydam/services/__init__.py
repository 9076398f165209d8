"""Business logic services."""

from jewelrydam.services.deletion_service import DeletionService
from jewelrydam.services.ingestion_service import IngestionMetadata, IngestionService

__all__ = ["DeletionService", "IngestionMetadata", "IngestionService"]
