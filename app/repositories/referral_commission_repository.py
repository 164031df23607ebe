"""
Referral commission repository.

Data access layer for ReferralCommission model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.referral_commission import ReferralCommission
from app.repositories.base import BaseRepository


class ReferralCommissionRepository(BaseRepository[ReferralCommission]):
    """Referral commission repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral commission repository."""
        super().__init__(ReferralCommission, session)

    async def get_by_referrer(
        self, referrer_id: int, status: str | None = None
    ) -> list[ReferralCommission]:
        """
        Get commissions earned by a referrer, newest first.

        Args:
            referrer_id: Referrer user ID
            status: Optional status filter

        Returns:
            List of commission entries
        """
        stmt = select(ReferralCommission).where(
            ReferralCommission.referrer_id == referrer_id
        )
        if status:
            stmt = stmt.where(ReferralCommission.status == status)
        stmt = stmt.order_by(ReferralCommission.created_at.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())
