"""Celery application for post-commit purchase notifications.

Only receipt emails and audit exports run here. Nothing that touches a
balance or ownership row is ever queued, so a lost task can never leave
the ledger inconsistent.
"""

from celery import Celery
from storefront.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "storefront_worker",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["storefront.worker"],
)

celery_app.conf.update(
    # Task arguments are ids, titles and decimal strings
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],

    timezone="UTC",
    enable_utc=True,

    task_track_started=True,
    task_time_limit=300,
    result_expires=3600,

    # Notifications are re-sent rather than dropped if a worker dies mid-task
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
)
