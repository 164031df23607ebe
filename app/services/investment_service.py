"""
Investment service.

Lists a user's investments, computes portfolio totals and purchases plans.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import InvestmentStatus
from app.models.investment import Investment
from app.models.plan import Plan
from app.repositories.investment_repository import InvestmentRepository
from app.repositories.plan_repository import PlanRepository
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService, log_operation, transaction
from app.services.platform_settings_service import PlatformSettingsService
from app.utils.datetime_utils import term_end, utc_now
from smartgrow.core.exceptions import RequestRejected
from smartgrow.core.models import InvestmentStats
from smartgrow.core.portfolio import PortfolioCalculator


class InvestmentService(BaseService):
    """Service for investments and plan purchases."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize investment service.

        Args:
            session: Database session
        """
        super().__init__(session)
        self.investment_repo = InvestmentRepository(session)
        self.plan_repo = PlanRepository(session)
        self.user_repo = UserRepository(session)
        self.settings_service = PlatformSettingsService(session)
        self.calculator = PortfolioCalculator()

    async def list_plans(self) -> list[Plan]:
        """Plans available for purchase."""
        return await self.plan_repo.get_active_plans()

    @transaction
    async def list_investments(
        self,
        user_id: int,
        now: datetime | None = None,
        statuses: list[str] | None = None,
    ) -> list[Investment]:
        """
        User investments, newest first, after completing expired ones.

        Args:
            user_id: Owner user ID
            now: Current instant (defaults to UTC now)
            statuses: Optional status filter

        Returns:
            List of investments
        """
        now = now or utc_now()
        await self.investment_repo.complete_expired(user_id, now)
        return await self.investment_repo.get_user_investments(user_id, statuses)

    async def get_portfolio_stats(
        self, user_id: int, now: datetime | None = None
    ) -> InvestmentStats:
        """
        Portfolio totals for the investments dashboard.

        Args:
            user_id: Owner user ID
            now: Current instant (defaults to UTC now)

        Returns:
            InvestmentStats
        """
        investments = await self.list_investments(user_id, now)
        return self.calculator.calculate_stats(investments)

    @log_operation
    @transaction
    async def purchase_plan(
        self,
        user_id: int,
        plan_id: int,
        amount: Decimal,
        now: datetime | None = None,
    ) -> Investment:
        """
        Buy a plan with the user's balance.

        Args:
            user_id: Buyer user ID
            plan_id: Plan ID
            amount: Investment amount
            now: Purchase time, used as the investment start (defaults to UTC now)

        Returns:
            Created investment

        Raises:
            RequestRejected: If the plan is unavailable, the amount is out of
                limits or the balance is short
        """
        now = now or utc_now()

        plan = await self.plan_repo.get_by_id(plan_id)
        if plan is None or not plan.is_active:
            raise RequestRejected("Plan is not available", "plan_unavailable")

        user = await self.user_repo.get_for_update(user_id)
        if user is None:
            raise LookupError(f"User {user_id} not found")

        platform_settings = await self.settings_service.get_settings()
        self.calculator.validate_purchase(plan, amount, user.balance, platform_settings)

        if not await self.user_repo.decrement_balance(user_id, amount):
            raise RequestRejected("Insufficient balance", "insufficient_balance")

        investment = await self.investment_repo.create(
            user_id=user_id,
            plan_id=plan.id,
            amount_invested=amount,
            status=InvestmentStatus.ACTIVE.value,
            start_date=now,
            end_date=term_end(now, plan.duration_days),
            total_days_collected=0,
        )

        self.logger.info(
            "Plan purchased",
            extra={
                "user_id": user_id,
                "plan_id": plan.id,
                "investment_id": investment.id,
                "amount": str(amount),
            },
        )
        return investment
