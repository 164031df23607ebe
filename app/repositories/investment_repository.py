"""
Investment repository.

Data access layer for Investment model.
"""

from datetime import datetime

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import InvestmentStatus
from app.models.investment import Investment
from app.repositories.base import BaseRepository


class InvestmentRepository(BaseRepository[Investment]):
    """Investment repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize investment repository."""
        super().__init__(Investment, session)

    async def get_user_investment(
        self, user_id: int, investment_id: int
    ) -> Investment | None:
        """
        Get an investment owned by the user.

        Args:
            user_id: Owner user ID
            investment_id: Investment ID

        Returns:
            Investment or None if missing or owned by someone else
        """
        stmt = select(Investment).where(
            Investment.id == investment_id,
            Investment.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def get_user_investments(
        self,
        user_id: int,
        statuses: list[str] | None = None,
    ) -> list[Investment]:
        """
        Get user investments, newest first.

        Args:
            user_id: Owner user ID
            statuses: Optional status filter

        Returns:
            List of investments with their plans loaded
        """
        stmt = select(Investment).where(Investment.user_id == user_id)
        if statuses:
            stmt = stmt.where(Investment.status.in_(statuses))
        stmt = stmt.order_by(Investment.created_at.desc())

        result = await self.session.execute(stmt)
        return list(result.unique().scalars().all())

    async def complete_expired(self, user_id: int, now: datetime) -> int:
        """
        Mark active investments whose end date has passed as completed.

        Args:
            user_id: Owner user ID
            now: Current instant

        Returns:
            Number of investments updated
        """
        stmt = (
            update(Investment)
            .where(
                Investment.user_id == user_id,
                Investment.status == InvestmentStatus.ACTIVE.value,
                Investment.end_date.is_not(None),
                Investment.end_date <= now,
            )
            .values(status=InvestmentStatus.COMPLETED.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()

        if result.rowcount:
            logger.info(
                "Expired investments completed",
                extra={"user_id": user_id, "count": result.rowcount},
            )
        return result.rowcount or 0
