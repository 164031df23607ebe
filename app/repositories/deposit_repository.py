"""
Deposit repository.

Data access layer for Deposit model.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.deposit import Deposit
from app.repositories.base import BaseRepository


class DepositRepository(BaseRepository[Deposit]):
    """Deposit repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize deposit repository."""
        super().__init__(Deposit, session)

    async def get_user_deposits(
        self, user_id: int, limit: int = 10, offset: int = 0
    ) -> list[Deposit]:
        """
        Get one page of a user's deposits, newest first.

        Args:
            user_id: Owner user ID
            limit: Page size
            offset: Rows to skip

        Returns:
            List of deposits
        """
        stmt = (
            select(Deposit)
            .where(Deposit.user_id == user_id)
            .order_by(Deposit.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_user_deposits(self, user_id: int) -> int:
        """Total number of deposits made by a user."""
        stmt = select(func.count(Deposit.id)).where(Deposit.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
