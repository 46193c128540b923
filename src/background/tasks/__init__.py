"""
Background tasks package.
"""

from .audit_assignments import audit_assignments_task

__all__ = [
    "audit_assignments_task",
]
