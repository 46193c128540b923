"""
Unit-of-work boundary for the assignment coordinator.

The coordinator commits the job write and the engineer write separately, so
transaction control is exposed explicitly rather than hidden behind a
decorator. Driver failures surface as StorageError.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.logging import get_logger

from .helpers import storage_errors

logger = get_logger(__name__)


class TransactionService:
    """Commit and rollback over one request-scoped session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def in_transaction(self) -> bool:
        return self.session.in_transaction()

    async def commit(self) -> None:
        with storage_errors("commit"):
            await self.session.commit()
        logger.debug("Transaction committed")

    async def rollback(self) -> None:
        """Discard uncommitted writes; a no-op when nothing is pending."""
        if not self.in_transaction:
            return
        with storage_errors("rollback"):
            await self.session.rollback()
        logger.debug("Transaction rolled back")
