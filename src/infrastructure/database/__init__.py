"""
Database package.
"""

from .models import Base, EngineerModel, JobModel
from .repositories import EngineerRepository, JobRepository, TransactionService

__all__ = [
    "Base",
    "EngineerModel",
    "JobModel",
    "EngineerRepository",
    "JobRepository",
    "TransactionService",
]
