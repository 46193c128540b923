"""
Database repositories package.
"""

from .engineer_repository import EngineerRepository
from .job_repository import JobRepository
from .transaction_repository import TransactionService

__all__ = [
    "EngineerRepository",
    "JobRepository",
    "TransactionService",
]
