"""
Referral statistics module.

Builds the referral dashboard: per-level counts, commission earnings and
the list of referred users.
"""

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.referral_commission_repository import (
    ReferralCommissionRepository,
)
from app.repositories.user_repository import UserRepository
from app.utils.datetime_utils import utc_now
from smartgrow.constants import REFERRAL_DEPTH
from smartgrow.core.commission import CommissionAggregator


class ReferralStatisticsManager:
    """Manages referral statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize statistics manager."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.commission_repo = ReferralCommissionRepository(session)
        self.aggregator = CommissionAggregator()

    async def get_referral_stats(
        self, user_id: int, now: datetime | None = None
    ) -> dict[str, Any]:
        """
        Get referral statistics for user.

        Args:
            user_id: User ID
            now: Current instant (defaults to UTC now)

        Returns:
            Dict with level counts and earnings, e.g. level1_count,
            total_earnings, today_earnings, level3_earnings
        """
        now = now or utc_now()

        downline = await self.user_repo.get_downline(user_id, REFERRAL_DEPTH)
        counts = self.aggregator.count_by_level(downline, user_id)

        entries = await self.commission_repo.get_by_referrer(user_id)
        earnings = self.aggregator.aggregate_earnings(entries, now)

        return {**counts.as_dict(), **earnings.as_dict()}

    async def get_referral_history(self, user_id: int) -> list[dict[str, Any]]:
        """
        Referred users with their level, newest first.

        Args:
            user_id: User ID

        Returns:
            List of dicts with user_id, full_name, referral_code, level,
            created_at
        """
        downline = await self.user_repo.get_downline(user_id, REFERRAL_DEPTH)
        levels = self.aggregator.referral_levels(downline, user_id, REFERRAL_DEPTH)
        users = {u.id: u for u in downline}

        history = []
        for level, member_ids in levels.items():
            for member_id in member_ids:
                user = users[member_id]
                history.append({
                    "user_id": user.id,
                    "full_name": user.full_name,
                    "referral_code": user.referral_code,
                    "level": level,
                    "created_at": user.created_at,
                })

        history.sort(key=lambda item: item["created_at"], reverse=True)
        return history
