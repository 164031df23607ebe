"""
Income collection endpoint.

Atomic mutations behind the Collect action: collect daily income and
increment a user's balance. This is the only place where an investment's
collection progress and the user's balance are written.

Concurrency: the investment row is locked (SELECT ... FOR UPDATE) and the
available days are recomputed from the locked row. A request prepared from
stale data, or submitted twice, is rejected instead of being paid twice.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import InvestmentStatus
from app.repositories.investment_repository import InvestmentRepository
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService, transaction
from app.services.referral.commission_processor import ReferralCommissionProcessor
from smartgrow.constants import COLLECTION_PERIOD
from smartgrow.core.models import CollectionRequest, CollectionResponse
from smartgrow.core.models import Investment as InvestmentSnapshot
from smartgrow.core.time_window import TimeWindowCalculator

ERROR_NOT_FOUND = "Investment not found"
ERROR_NOT_ACTIVE = "Investment is not active"
ERROR_ALREADY_COLLECTED = "Income already collected"


class SqlCollectionEndpoint(BaseService):
    """Collect-daily-income and increment-balance operations over SQL."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize collection endpoint.

        Args:
            session: Async database session
        """
        super().__init__(session)
        self.investment_repo = InvestmentRepository(session)
        self.user_repo = UserRepository(session)
        self.commission_processor = ReferralCommissionProcessor(session)
        self.calculator = TimeWindowCalculator()

    @transaction
    async def collect_daily_income(
        self,
        user_id: int,
        request: CollectionRequest,
        now: datetime,
    ) -> CollectionResponse:
        """
        Apply a collection request atomically.

        Profit is recomputed from the locked row; the client's
        profit_per_day is never trusted. The collection anchor advances by
        whole days (anchor + days * 24h), so it never regresses and partial
        days carry over.

        Args:
            user_id: Owner of the investment
            request: Prepared collection request
            now: Current instant

        Returns:
            CollectionResponse; failures are reported with success=False
        """
        investment = await self.investment_repo.get_for_update(request.investment_id)
        if investment is None or investment.user_id != user_id:
            return self._reject(request, ERROR_NOT_FOUND)

        snapshot = InvestmentSnapshot.parse(investment)
        if snapshot.status != InvestmentStatus.ACTIVE:
            return self._reject(request, ERROR_NOT_ACTIVE)

        available = self.calculator.available_days(snapshot, now)
        if available == 0 or available < request.days_to_collect:
            return self._reject(request, ERROR_ALREADY_COLLECTED, available=available)

        days = request.days_to_collect
        profit_per_day = self.calculator.profit_per_day(snapshot)
        if profit_per_day != request.profit_per_day:
            self.logger.warning(
                "Client profit_per_day differs from stored plan, using stored value",
                extra={
                    "investment_id": investment.id,
                    "requested": str(request.profit_per_day),
                    "actual": str(profit_per_day),
                },
            )
        profit = profit_per_day * days

        anchor = snapshot.last_income_collection_date or snapshot.start_date
        investment.last_income_collection_date = anchor + COLLECTION_PERIOD * days
        investment.total_days_collected = snapshot.total_days_collected + days

        is_final = investment.total_days_collected >= snapshot.plan.duration_days
        if is_final:
            investment.status = InvestmentStatus.COMPLETED.value

        await self.session.flush()
        await self.increment_user_balance(user_id, profit)
        await self.commission_processor.process_earnings_commission(user_id, profit, now)

        self.logger.info(
            "Daily income collected",
            extra={
                "investment_id": investment.id,
                "user_id": user_id,
                "days": days,
                "profit": str(profit),
                "total_days_collected": investment.total_days_collected,
                "is_final_collection": is_final,
            },
        )

        return CollectionResponse(
            success=True,
            profit_earned=profit,
            days_collected=days,
            is_final_collection=is_final,
        )

    async def increment_user_balance(self, user_id: int, amount: Decimal) -> Decimal:
        """
        Credit a user's balance under a row lock.

        Args:
            user_id: User ID
            amount: Amount to credit

        Returns:
            New balance

        Raises:
            LookupError: If the user does not exist
        """
        user = await self.user_repo.increment_balance(user_id, amount)
        if user is None:
            raise LookupError(f"User {user_id} not found")
        return user.balance

    def _reject(
        self, request: CollectionRequest, error: str, **context
    ) -> CollectionResponse:
        self.logger.warning(
            f"Collection rejected: {error}",
            extra={
                "investment_id": request.investment_id,
                "days_requested": request.days_to_collect,
                **context,
            },
        )
        return CollectionResponse(success=False, error=error)
