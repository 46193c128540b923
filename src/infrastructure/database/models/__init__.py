"""
Database models package.
"""

from .base import Base, BaseModel
from .engineer import EngineerModel
from .job import JobModel

__all__ = [
    "Base",
    "BaseModel",
    "EngineerModel",
    "JobModel",
]
