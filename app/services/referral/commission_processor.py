"""
Referral commission processing module.

Credits commissions to the upline of a user when they deposit or earn.
Runs inside the caller's transaction; nothing is committed here.
"""

from datetime import datetime
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import CommissionStatus
from app.repositories.referral_commission_repository import (
    ReferralCommissionRepository,
)
from app.repositories.user_repository import UserRepository
from app.services.platform_settings_service import PlatformSettingsService
from smartgrow.constants import (
    COMMISSION_SOURCE_DEPOSIT,
    COMMISSION_SOURCE_EARNINGS,
    REFERRAL_DEPTH,
)
from smartgrow.core.commission import CommissionAggregator
from smartgrow.core.models import CommissionPayout


class ReferralCommissionProcessor:
    """Computes and records referral commissions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize commission processor."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.commission_repo = ReferralCommissionRepository(session)
        self.settings_service = PlatformSettingsService(session)
        self.aggregator = CommissionAggregator()

    async def process_deposit_commission(
        self, user_id: int, amount: Decimal, now: datetime
    ) -> list[CommissionPayout]:
        """
        Pay the direct referrer a share of an approved deposit.

        Args:
            user_id: Depositing user ID
            amount: Approved deposit amount
            now: Timestamp recorded on the ledger entries

        Returns:
            Payouts credited
        """
        return await self._process(user_id, amount, now, COMMISSION_SOURCE_DEPOSIT)

    async def process_earnings_commission(
        self, user_id: int, amount: Decimal, now: datetime
    ) -> list[CommissionPayout]:
        """
        Pay up to three referrer levels a share of collected income.

        Args:
            user_id: Earning user ID
            amount: Collected profit
            now: Timestamp recorded on the ledger entries

        Returns:
            Payouts credited
        """
        return await self._process(user_id, amount, now, COMMISSION_SOURCE_EARNINGS)

    async def _process(
        self, user_id: int, amount: Decimal, now: datetime, source: str
    ) -> list[CommissionPayout]:
        upline = await self.user_repo.get_upline(user_id, REFERRAL_DEPTH)
        chain = self.aggregator.referrer_chain(upline, user_id, REFERRAL_DEPTH)
        if not chain:
            return []

        platform_settings = await self.settings_service.get_settings()
        payouts = self.aggregator.distribute(
            amount, chain, user_id, platform_settings, source
        )

        for payout in payouts:
            await self.commission_repo.create(
                referrer_id=payout.referrer_id,
                referred_user_id=payout.referred_user_id,
                level=payout.level,
                percent=payout.percent,
                amount=payout.amount,
                source=payout.source,
                status=CommissionStatus.COMPLETED.value,
                created_at=now,
            )
            await self.user_repo.increment_balance(payout.referrer_id, payout.amount)

        logger.info(
            "Referral commissions credited",
            extra={
                "user_id": user_id,
                "source": source,
                "base_amount": str(amount),
                "payouts": len(payouts),
                "total": str(sum((p.amount for p in payouts), Decimal("0"))),
            },
        )
        return payouts
