"""API dependencies."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jewelrydam.services.deletion_service import DeletionService
from jewelrydam.services.ingestion_service import IngestionService
from jewelrydam.storage.base import BaseStorageDriver


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session from the factory built at startup."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_storage(request: Request) -> BaseStorageDriver:
    """Get the object storage driver built at startup."""
    return request.app.state.storage


def get_ingestion_service(
    db: Session = Depends(get_db),
    storage: BaseStorageDriver = Depends(get_storage),
) -> IngestionService:
    """Build the ingestion workflow for a request."""
    return IngestionService(db, storage)


def get_deletion_service(
    db: Session = Depends(get_db),
    storage: BaseStorageDriver = Depends(get_storage),
) -> DeletionService:
    """Build the deletion workflow for a request."""
    return DeletionService(db, storage)
