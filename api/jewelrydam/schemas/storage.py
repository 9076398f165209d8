"""Storage maintenance schemas."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class StorageTestResponse(BaseModel):
    """Response for storage connection test."""

    status: str = Field(..., description="Status: ok or error")
    provider: str = Field(..., description="Storage provider")
    message: Optional[str] = Field(None, description="Error message if failed")


class ReconcileRequest(BaseModel):
    """Request to reconcile object storage with asset rows."""

    delete: bool = Field(
        default=False, description="Remove orphaned blobs instead of only reporting them"
    )


class ReconcileResponse(BaseModel):
    """Response for a dispatched reconciliation."""

    task_id: str = Field(..., description="Celery task ID")
    status: str = Field(..., description="Task status")
    message: str = Field(..., description="Human-readable message")


class ReconcileStatus(BaseModel):
    """Status of a reconciliation task."""

    task_id: str
    status: str  # pending, started, success, failure
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
