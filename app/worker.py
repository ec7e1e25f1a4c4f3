"""Celery app that re-runs ticket processing when a user retries a failed ticket."""

from celery import Celery

from app.settings import settings

celery_app = Celery(
    "incident_tickets",
    broker=str(settings.REDIS_URL),
    backend=str(settings.REDIS_URL),
    include=["app.services.tasks"],
)

celery_app.conf.update(
    task_track_started=True,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # A lost worker must not re-run a ticket behind the user's back.
    task_acks_late=False,
    # One ticket per worker process at a time keeps Gemini calls sequential.
    worker_prefetch_multiplier=1,
    result_expires=24 * 60 * 60,
)
