"""
Celery application for periodic dispatch maintenance.

Only the assignment audit runs here today. It is scheduled by beat on the
``maintenance`` queue so a slow sweep never delays other work.
"""

from celery import Celery
from celery.signals import setup_logging

from src.config.logging import configure_logging
from src.config.settings import settings

MAINTENANCE_QUEUE = "maintenance"

celery_app = Celery(
    "dispatch",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["src.background.tasks.audit_assignments"],
)

celery_app.conf.update(
    task_routes={"audit_assignments_task": {"queue": MAINTENANCE_QUEUE}},
    task_default_queue="default",
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    result_expires=3600,
    # One sweep at a time per worker process
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    task_soft_time_limit=60,
    task_time_limit=120,
    task_acks_late=False,
    task_reject_on_worker_lost=settings.CELERY_TASK_REJECT_ON_WORKER_LOST,
    beat_schedule={
        "audit-assignments": {
            "task": "audit_assignments_task",
            "schedule": float(settings.CELERY_AUDIT_ASSIGNMENTS_INTERVAL_SECONDS),
            "options": {"queue": MAINTENANCE_QUEUE},
        },
    },
    worker_send_task_events=True,
    worker_hijack_root_logger=False,
    worker_redirect_stdouts=False,
)


@setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Workers log through structlog like the API does."""
    configure_logging()


if __name__ == "__main__":
    celery_app.start()
