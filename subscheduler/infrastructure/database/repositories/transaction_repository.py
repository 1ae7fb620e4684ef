"""
Transaction service for committing repository work as one unit.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """Commits or rolls back the work done on one session.

    Repositories only flush; whoever owns the unit of work commits it here.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute_in_transaction(
        self, operation: Callable[[], Awaitable[T]], name: str = "operation"
    ) -> T:
        """Run ``operation`` and commit, rolling back if it raises."""
        try:
            result = await operation()
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Transaction rolled back", operation=name, error=str(e))
            raise

        logger.debug("Transaction committed", operation=name)
        return result

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
