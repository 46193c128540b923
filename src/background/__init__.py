"""
Background tasks package.
"""

from .celery_app import celery_app
from .tasks import audit_assignments_task

__all__ = [
    "audit_assignments_task",
    "celery_app",
]
