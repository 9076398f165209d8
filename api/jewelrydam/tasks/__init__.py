"""Celery tasks."""

from jewelrydam.tasks.reconcile import reconcile_storage_task

__all__ = ["reconcile_storage_task"]
