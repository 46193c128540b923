"""
Domain entities package.
"""

from .engineer import Engineer
from .job import Job

__all__ = [
    "Engineer",
    "Job",
]
