"""
Income collection service.

Reads an investment snapshot, asks the TimeWindowCalculator whether and
how much can be collected, and hands the request to the collection
endpoint. Only the endpoint response is trusted afterwards.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.investment_repository import InvestmentRepository
from app.services.base_service import BaseService, log_operation
from app.services.collection_endpoint import SqlCollectionEndpoint
from app.utils.datetime_utils import utc_now
from smartgrow.core.exceptions import InvalidRecord
from smartgrow.core.models import CollectionResponse
from smartgrow.core.models import Investment as InvestmentSnapshot
from smartgrow.core.time_window import TimeWindowCalculator
from smartgrow.types import CollectionStatusDict


class IncomeCollectionService(BaseService):
    """Service for daily income collection."""

    def __init__(
        self,
        session: AsyncSession,
        endpoint: SqlCollectionEndpoint | None = None,
    ) -> None:
        """
        Initialize income collection service.

        Args:
            session: Database session
            endpoint: Collection endpoint (defaults to the SQL endpoint)
        """
        super().__init__(session)
        self.investment_repo = InvestmentRepository(session)
        self.endpoint = endpoint or SqlCollectionEndpoint(session)
        self.calculator = TimeWindowCalculator()

    async def _load_snapshot(self, user_id: int, investment_id: int) -> InvestmentSnapshot:
        investment = await self.investment_repo.get_user_investment(user_id, investment_id)
        if investment is None:
            raise LookupError(f"Investment {investment_id} not found for user {user_id}")
        return InvestmentSnapshot.parse(investment)

    async def get_collection_status(
        self,
        user_id: int,
        investment_id: int,
        now: datetime | None = None,
    ) -> CollectionStatusDict:
        """
        State of the Collect action for one investment.

        Args:
            user_id: Owner user ID
            investment_id: Investment ID
            now: Current instant (defaults to UTC now)

        Returns:
            Dict with available_days, can_collect, progress_percent,
            days_remaining and profit_per_day

        Raises:
            LookupError: If the investment does not belong to the user
            InvalidRecord: If the stored investment is malformed
        """
        now = now or utc_now()
        snapshot = await self._load_snapshot(user_id, investment_id)

        return {
            "investment_id": snapshot.id,
            "available_days": self.calculator.available_days(snapshot, now),
            "can_collect": self.calculator.can_collect(snapshot, now),
            "progress_percent": self.calculator.progress_percent(
                snapshot.start_date, snapshot.end_date, now
            ),
            "days_remaining": self.calculator.days_remaining(snapshot.end_date, now),
            "profit_per_day": self.calculator.profit_per_day(snapshot),
        }

    @log_operation
    async def collect_income(
        self,
        user_id: int,
        investment_id: int,
        now: datetime | None = None,
    ) -> CollectionResponse:
        """
        Collect all available daily income of an investment.

        Args:
            user_id: Owner user ID
            investment_id: Investment ID
            now: Current instant (defaults to UTC now)

        Returns:
            Successful endpoint response; callers resync the investment
            when is_final_collection is set

        Raises:
            NoCollectableDays: If nothing is collectable yet
            CollectionRejected: If the endpoint refused the request
            LookupError: If the investment does not belong to the user
            InvalidRecord: If the stored investment is malformed
        """
        now = now or utc_now()
        try:
            snapshot = await self._load_snapshot(user_id, investment_id)
        except InvalidRecord:
            self.logger.error(
                "Stored investment is malformed",
                extra={"investment_id": investment_id, "user_id": user_id},
            )
            raise

        request = self.calculator.collect(snapshot, now)
        response = await self.endpoint.collect_daily_income(user_id, request, now)
        return self.calculator.handle_collection_response(
            response, investment_id=investment_id
        )
