"""Object storage maintenance endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from jewelrydam.api.deps import get_storage
from jewelrydam.schemas.storage import (
    ReconcileRequest,
    ReconcileResponse,
    ReconcileStatus,
    StorageTestResponse,
)
from jewelrydam.storage.base import BaseStorageDriver

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/test", response_model=StorageTestResponse)
async def test_storage_connection(storage: BaseStorageDriver = Depends(get_storage)):
    """Test that object storage is reachable."""
    try:
        connected = await storage.test_connection()
    except Exception as e:
        return StorageTestResponse(
            status="error",
            provider=storage.provider,
            message=str(e),
        )

    if connected:
        return StorageTestResponse(
            status="ok",
            provider=storage.provider,
            message="Connection successful",
        )
    return StorageTestResponse(
        status="error",
        provider=storage.provider,
        message="Connection failed",
    )


@router.post("/reconcile", response_model=ReconcileResponse, status_code=status.HTTP_202_ACCEPTED)
def start_reconciliation(request: ReconcileRequest):
    """Trigger a search for blobs whose asset no longer exists.

    Blob removal during deletion is best-effort, so object storage can hold
    images for deleted assets. This dispatches a task that lists them and,
    with **delete**, removes them. Returns task ID to track progress.
    """
    from jewelrydam.celery_app import celery_app

    try:
        task = celery_app.send_task(
            "jewelrydam.tasks.reconcile.reconcile_storage",
            kwargs={"delete": request.delete},
        )

        return ReconcileResponse(
            task_id=task.id,
            status="accepted",
            message="Storage reconciliation started",
        )

    except Exception as e:
        logger.error(f"Failed to start reconciliation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to start reconciliation", "details": str(e)},
        )


@router.get("/reconcile/{task_id}", response_model=ReconcileStatus)
def get_reconciliation_status(task_id: str):
    """Get status of a reconciliation task."""
    from jewelrydam.celery_app import celery_app

    try:
        result = celery_app.AsyncResult(task_id)

        response = ReconcileStatus(
            task_id=task_id,
            status=result.state,
        )

        if result.ready():
            if result.successful():
                response.result = result.result
            else:
                response.error = str(result.info)
        elif result.state == "PROGRESS":
            response.result = result.info

        return response

    except Exception as e:
        logger.error(f"Failed to get task status: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to get task status", "details": str(e)},
        )
