"""Storage reconciliation task."""

import asyncio
import logging
from typing import Any, Dict

from jewelrydam.celery_app import celery_app
from jewelrydam.config import settings
from jewelrydam.database import create_db_engine, create_session_factory
from jewelrydam.services.reconciliation_service import reconcile_storage
from jewelrydam.storage.factory import get_storage_driver

logger = logging.getLogger(__name__)


@celery_app.task(name="jewelrydam.tasks.reconcile.reconcile_storage", bind=True)
def reconcile_storage_task(self, delete: bool = False) -> Dict[str, Any]:
    """Find (and optionally remove) blobs with no asset row.

    Args:
        delete: Remove orphaned blobs instead of only reporting them

    Returns:
        Dict with scanned, orphaned, deleted and errors

    Examples:
        >>> result = reconcile_storage_task.delay(delete=False)
        >>> result.get()
        {'scanned': 120, 'orphaned': ['assets/3f2a.jpg'], 'deleted': [], 'errors': []}
    """
    engine = create_db_engine(settings.database_url)
    db = create_session_factory(engine)()

    try:
        logger.info(f"Starting storage reconciliation (delete={delete})")
        self.update_state(state="PROGRESS", meta={"status": "Scanning object storage"})

        storage = get_storage_driver(settings)

        # Run async storage calls in the worker's sync context
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            result = loop.run_until_complete(reconcile_storage(db, storage, delete=delete))
        finally:
            loop.close()

        logger.info(f"Storage reconciliation complete: {result}")
        return result

    finally:
        db.close()
        engine.dispose()
