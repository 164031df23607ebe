"""
Tests for the SQL collection endpoint and the income collection service.

Tests cover:
- Monotonic day accounting across repeated collections
- Rejection of stale and duplicate requests
- Final collection completing the investment
- Balance credit and earnings commissions inside the transaction
- Service flow from snapshot to endpoint response
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.services.collection_endpoint import (
    ERROR_ALREADY_COLLECTED,
    ERROR_NOT_ACTIVE,
    ERROR_NOT_FOUND,
    SqlCollectionEndpoint,
)
from app.services.income_collection_service import IncomeCollectionService
from smartgrow import (
    CollectionRejected,
    CollectionRequest,
    CollectionResponse,
    InvalidRecord,
    NoCollectableDays,
)

DAY = timedelta(hours=24)


def request_for(days: int, investment_id: int = 1, per_day: str = "100") -> CollectionRequest:
    return CollectionRequest(
        investment_id=investment_id,
        days_to_collect=days,
        profit_per_day=Decimal(per_day),
    )


@pytest.fixture
def endpoint(mock_session, make_user):
    """Endpoint with mocked repositories and commission processor."""
    endpoint = SqlCollectionEndpoint(mock_session)
    endpoint.investment_repo = AsyncMock()
    endpoint.user_repo = AsyncMock()
    endpoint.user_repo.increment_balance.return_value = make_user(7, balance=Decimal("100"))
    endpoint.commission_processor = AsyncMock()
    return endpoint


class TestSqlCollectionEndpoint:
    """Test the collect-daily-income mutation."""

    @pytest.mark.asyncio
    async def test_first_collection(self, endpoint, make_orm_investment, start_time, mock_session):
        """One day after start one day is paid and the anchor advances 24h."""
        investment = make_orm_investment()
        endpoint.investment_repo.get_for_update.return_value = investment
        now = start_time + DAY + timedelta(hours=3)

        response = await endpoint.collect_daily_income(7, request_for(1), now)

        assert response.success is True
        assert response.profit_earned == Decimal("100")
        assert response.days_collected == 1
        assert response.is_final_collection is False
        assert investment.total_days_collected == 1
        assert investment.last_income_collection_date == start_time + DAY
        endpoint.user_repo.increment_balance.assert_awaited_once_with(7, Decimal("100"))
        endpoint.commission_processor.process_earnings_commission.assert_awaited_once_with(
            7, Decimal("100"), now
        )
        mock_session.commit.assert_awaited()

    @pytest.mark.asyncio
    async def test_day_accounting_is_monotonic(self, endpoint, make_orm_investment, start_time):
        """Collected days only grow and never exceed elapsed periods."""
        investment = make_orm_investment()
        endpoint.investment_repo.get_for_update.return_value = investment

        schedule = [
            (start_time + DAY, 1),
            (start_time + 4 * DAY + timedelta(hours=5), 3),
            (start_time + 9 * DAY, 5),
        ]
        previous = 0
        for now, days in schedule:
            response = await endpoint.collect_daily_income(7, request_for(days), now)

            assert response.success is True
            assert investment.total_days_collected == previous + days
            elapsed = (now - start_time) // DAY
            assert investment.total_days_collected <= elapsed
            previous = investment.total_days_collected

        assert investment.last_income_collection_date == start_time + 9 * DAY

    @pytest.mark.asyncio
    async def test_duplicate_submission_rejected(self, endpoint, make_orm_investment, start_time):
        """Submitting the same request twice pays once."""
        investment = make_orm_investment()
        endpoint.investment_repo.get_for_update.return_value = investment
        now = start_time + DAY

        first = await endpoint.collect_daily_income(7, request_for(1), now)
        second = await endpoint.collect_daily_income(7, request_for(1), now)

        assert first.success is True
        assert second.success is False
        assert second.error == ERROR_ALREADY_COLLECTED
        assert investment.total_days_collected == 1
        endpoint.user_repo.increment_balance.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stale_request_rejected(self, endpoint, make_orm_investment, start_time):
        """Requesting more days than available is refused."""
        endpoint.investment_repo.get_for_update.return_value = make_orm_investment()

        response = await endpoint.collect_daily_income(7, request_for(3), start_time + DAY)

        assert response.success is False
        assert response.error == ERROR_ALREADY_COLLECTED
        endpoint.user_repo.increment_balance.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_final_collection(self, endpoint, make_orm_investment, start_time):
        """The last day completes the investment."""
        investment = make_orm_investment(
            total_days_collected=29,
            last_income_collection_date=start_time + 29 * DAY,
        )
        endpoint.investment_repo.get_for_update.return_value = investment

        response = await endpoint.collect_daily_income(
            7, request_for(1), start_time + 45 * DAY
        )

        assert response.is_final_collection is True
        assert investment.total_days_collected == 30
        assert investment.status == "completed"

    @pytest.mark.asyncio
    async def test_server_profit_used(self, endpoint, make_orm_investment, start_time):
        """A tampered profit_per_day is ignored."""
        endpoint.investment_repo.get_for_update.return_value = make_orm_investment()

        response = await endpoint.collect_daily_income(
            7, request_for(1, per_day="999"), start_time + DAY
        )

        assert response.profit_earned == Decimal("100")
        endpoint.user_repo.increment_balance.assert_awaited_once_with(7, Decimal("100"))

    @pytest.mark.asyncio
    async def test_missing_investment(self, endpoint, start_time):
        """Unknown investments are reported as not found."""
        endpoint.investment_repo.get_for_update.return_value = None

        response = await endpoint.collect_daily_income(7, request_for(1), start_time + DAY)

        assert response.success is False
        assert response.error == ERROR_NOT_FOUND

    @pytest.mark.asyncio
    async def test_other_users_investment(self, endpoint, make_orm_investment, start_time):
        """Users cannot collect someone else's investment."""
        endpoint.investment_repo.get_for_update.return_value = make_orm_investment(user_id=8)

        response = await endpoint.collect_daily_income(7, request_for(1), start_time + DAY)

        assert response.error == ERROR_NOT_FOUND

    @pytest.mark.asyncio
    async def test_inactive_investment(self, endpoint, make_orm_investment, start_time):
        """Cancelled investments cannot be collected."""
        investment = make_orm_investment(status="cancelled")
        endpoint.investment_repo.get_for_update.return_value = investment

        response = await endpoint.collect_daily_income(7, request_for(1), start_time + 3 * DAY)

        assert response.error == ERROR_NOT_ACTIVE
        assert investment.total_days_collected == 0

    @pytest.mark.asyncio
    async def test_missing_user_rolls_back(
        self, endpoint, make_orm_investment, start_time, mock_session
    ):
        """A balance credit for an unknown user aborts the transaction."""
        endpoint.investment_repo.get_for_update.return_value = make_orm_investment()
        endpoint.user_repo.increment_balance.return_value = None

        with pytest.raises(LookupError):
            await endpoint.collect_daily_income(7, request_for(1), start_time + DAY)

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()


class TestIncomeCollectionService:
    """Test the collect flow end to end with a mocked endpoint."""

    @pytest.fixture
    def service(self, mock_session, make_orm_investment):
        service = IncomeCollectionService(mock_session, endpoint=AsyncMock())
        service.investment_repo = AsyncMock()
        service.investment_repo.get_user_investment.return_value = make_orm_investment()
        return service

    @pytest.mark.asyncio
    async def test_collect_sends_prepared_request(self, service, start_time):
        """All available days are requested with the plan's per-day profit."""
        now = start_time + 3 * DAY
        service.endpoint.collect_daily_income.return_value = CollectionResponse(
            success=True,
            profit_earned=Decimal("300"),
            days_collected=3,
        )

        response = await service.collect_income(7, 1, now)

        assert response.profit_earned == Decimal("300")
        service.endpoint.collect_daily_income.assert_awaited_once_with(
            7, request_for(3), now
        )

    @pytest.mark.asyncio
    async def test_rejection_raises(self, service, start_time):
        """Endpoint errors surface as CollectionRejected with the same text."""
        service.endpoint.collect_daily_income.return_value = CollectionResponse(
            success=False, error=ERROR_ALREADY_COLLECTED
        )

        with pytest.raises(CollectionRejected, match=ERROR_ALREADY_COLLECTED):
            await service.collect_income(7, 1, start_time + DAY)

    @pytest.mark.asyncio
    async def test_too_early(self, service, start_time):
        """Nothing is sent to the endpoint before a full day has passed."""
        with pytest.raises(NoCollectableDays):
            await service.collect_income(7, 1, start_time + timedelta(hours=5))

        service.endpoint.collect_daily_income.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_investment(self, service, start_time):
        """Investments not owned by the user are not found."""
        service.investment_repo.get_user_investment.return_value = None

        with pytest.raises(LookupError):
            await service.collect_income(7, 99, start_time + DAY)

    @pytest.mark.asyncio
    async def test_malformed_investment(self, service, make_orm_investment, start_time):
        """A row without its plan fails loudly."""
        investment = make_orm_investment()
        investment.plan = None
        service.investment_repo.get_user_investment.return_value = investment

        with pytest.raises(InvalidRecord):
            await service.collect_income(7, 1, start_time + DAY)

    @pytest.mark.asyncio
    async def test_collection_status(self, service, start_time):
        """Status combines window, progress and per-day profit."""
        status = await service.get_collection_status(7, 1, start_time + 15 * DAY)

        assert status == {
            "investment_id": 1,
            "available_days": 15,
            "can_collect": True,
            "progress_percent": 50,
            "days_remaining": 15,
            "profit_per_day": Decimal("100"),
        }
