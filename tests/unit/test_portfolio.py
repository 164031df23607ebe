"""
Tests for portfolio calculations.

Tests cover:
- Total profit per investment
- Dashboard totals by status
- Term expiry
- Plan purchase limits
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from smartgrow import Plan, PlatformSettings, RequestRejected

DAY = timedelta(hours=24)


@pytest.fixture
def plan() -> Plan:
    """Plan with a 1000 minimum and no own maximum."""
    return Plan(
        id=3,
        name="Gold",
        duration_days=30,
        profit_percent=Decimal("30"),
        min_investment=Decimal("1000"),
    )


class TestTotalProfit:
    """Test profit over the full plan."""

    def test_total_profit(self, portfolio, make_investment):
        """10000 at 30% earns 3000 over the plan."""
        assert portfolio.total_profit(make_investment()) == Decimal("3000")

    def test_total_profit_fractional(self, portfolio, make_investment):
        """Decimal percents are kept exact."""
        investment = make_investment(
            amount_invested=Decimal("2500"),
            plan={"duration_days": 14, "profit_percent": "12.5"},
        )

        assert portfolio.total_profit(investment) == Decimal("312.5")


class TestCalculateStats:
    """Test dashboard totals."""

    def test_mixed_statuses(self, portfolio, make_investment, start_time):
        """Earnings count completed investments only."""
        investments = [
            make_investment(id=1, amount_invested=Decimal("10000")),
            make_investment(
                id=2,
                amount_invested=Decimal("5000"),
                status="completed",
                total_days_collected=30,
                last_income_collection_date=start_time + 30 * DAY,
            ),
            make_investment(id=3, amount_invested=Decimal("2000"), status="cancelled"),
        ]

        stats = portfolio.calculate_stats(investments)

        assert stats.total_invested == Decimal("17000")
        assert stats.active_investments == 1
        assert stats.completed_investments == 1
        assert stats.total_earnings == Decimal("1500")

    def test_no_investments(self, portfolio):
        """Empty portfolio gives zero totals."""
        stats = portfolio.calculate_stats([])

        assert stats.total_invested == Decimal("0")
        assert stats.active_investments == 0
        assert stats.total_earnings == Decimal("0")


class TestIsExpired:
    """Test term expiry detection."""

    def test_active_past_end(self, portfolio, make_investment, start_time):
        """An active investment past its end date is expired."""
        investment = make_investment(end_date=start_time + 30 * DAY)

        assert portfolio.is_expired(investment, start_time + 31 * DAY) is True

    def test_exactly_at_end(self, portfolio, make_investment, start_time):
        """The end instant itself counts as expired."""
        investment = make_investment(end_date=start_time + 30 * DAY)

        assert portfolio.is_expired(investment, start_time + 30 * DAY) is True

    def test_before_end(self, portfolio, make_investment, start_time):
        """Running investments are not expired."""
        investment = make_investment(end_date=start_time + 30 * DAY)

        assert portfolio.is_expired(investment, start_time + 10 * DAY) is False

    def test_without_end_date(self, portfolio, make_investment, start_time):
        """No end date, no expiry."""
        assert portfolio.is_expired(make_investment(), start_time + 400 * DAY) is False

    def test_completed_not_expired(self, portfolio, make_investment, start_time):
        """Only active investments can expire."""
        investment = make_investment(end_date=start_time + DAY, status="completed")

        assert portfolio.is_expired(investment, start_time + 2 * DAY) is False


class TestValidatePurchase:
    """Test plan purchase limits."""

    def test_valid_amount(self, portfolio, plan, platform_settings):
        """Amount within limits and balance is returned."""
        amount = portfolio.validate_purchase(
            plan, Decimal("2000"), Decimal("5000"), platform_settings
        )

        assert amount == Decimal("2000")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
    def test_non_positive(self, portfolio, plan, platform_settings, amount):
        """Zero and negative amounts are rejected."""
        with pytest.raises(RequestRejected) as exc_info:
            portfolio.validate_purchase(plan, amount, Decimal("5000"), platform_settings)

        assert exc_info.value.code == "invalid_amount"

    def test_below_plan_minimum(self, portfolio, plan, platform_settings):
        """Amounts under the plan minimum are rejected."""
        with pytest.raises(RequestRejected) as exc_info:
            portfolio.validate_purchase(
                plan, Decimal("999.99"), Decimal("5000"), platform_settings
            )

        assert exc_info.value.code == "below_minimum"

    def test_platform_maximum(self, portfolio, plan):
        """Without a plan maximum the platform maximum applies."""
        settings = PlatformSettings(max_investment_amount=Decimal("3000"))

        with pytest.raises(RequestRejected) as exc_info:
            portfolio.validate_purchase(plan, Decimal("3000.01"), Decimal("9000"), settings)

        assert exc_info.value.code == "above_maximum"

    def test_plan_maximum_wins(self, portfolio, platform_settings):
        """A plan maximum overrides the platform maximum."""
        plan = Plan(duration_days=7, profit_percent=Decimal("7"), max_investment=Decimal("500"))

        with pytest.raises(RequestRejected) as exc_info:
            portfolio.validate_purchase(
                plan, Decimal("600"), Decimal("9000"), platform_settings
            )

        assert exc_info.value.code == "above_maximum"

    def test_insufficient_balance(self, portfolio, plan, platform_settings):
        """Amounts above the balance are rejected."""
        with pytest.raises(RequestRejected) as exc_info:
            portfolio.validate_purchase(
                plan, Decimal("2000"), Decimal("1999"), platform_settings
            )

        assert exc_info.value.code == "insufficient_balance"
