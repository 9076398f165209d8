"""Celery application for background storage maintenance."""

from celery import Celery
from celery.schedules import crontab

from jewelrydam.config import settings

celery_app = Celery(
    "jewelrydam",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["jewelrydam.tasks.reconcile"],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    beat_schedule={
        # Report-only pass; removal is an explicit operator action
        "nightly-storage-reconcile": {
            "task": "jewelrydam.tasks.reconcile.reconcile_storage",
            "schedule": crontab(hour=3, minute=0),
            "kwargs": {"delete": False},
        },
    },
)
