"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Calculator instances
- Investment snapshot factory
- Commission entry factory
"""

from datetime import datetime
from decimal import Decimal

import pytest

from smartgrow import (
    CommissionAggregator,
    CommissionLedgerEntry,
    DepositValidator,
    Investment,
    PlatformSettings,
    PortfolioCalculator,
    TimeWindowCalculator,
    WithdrawalCalculator,
)


@pytest.fixture
def time_calc() -> TimeWindowCalculator:
    """TimeWindowCalculator instance."""
    return TimeWindowCalculator()


@pytest.fixture
def aggregator() -> CommissionAggregator:
    """CommissionAggregator instance."""
    return CommissionAggregator()


@pytest.fixture
def portfolio() -> PortfolioCalculator:
    """PortfolioCalculator instance."""
    return PortfolioCalculator()


@pytest.fixture
def deposit_validator() -> DepositValidator:
    """DepositValidator instance."""
    return DepositValidator()


@pytest.fixture
def withdrawal_calc() -> WithdrawalCalculator:
    """WithdrawalCalculator instance."""
    return WithdrawalCalculator()


@pytest.fixture
def platform_settings() -> PlatformSettings:
    """Platform settings with the default rates and limits."""
    return PlatformSettings()


@pytest.fixture
def make_investment(start_time):
    """
    Factory for investment snapshots.

    Defaults to 10000 invested in a 30-day plan paying 30%.
    """
    def _make(**overrides) -> Investment:
        data = {
            "id": 1,
            "user_id": 7,
            "start_date": start_time,
            "end_date": None,
            "last_income_collection_date": None,
            "total_days_collected": 0,
            "status": "active",
            "amount_invested": Decimal("10000"),
            "plan": {"duration_days": 30, "profit_percent": Decimal("30")},
        }
        data.update(overrides)
        return Investment.parse(data)

    return _make


@pytest.fixture
def make_entry():
    """Factory for commission ledger entries."""
    def _make(
        amount: str,
        level: int = 1,
        created_at: datetime | None = None,
        status: str = "completed",
    ) -> CommissionLedgerEntry:
        return CommissionLedgerEntry(
            referrer_id=1,
            level=level,
            amount=Decimal(amount),
            created_at=created_at or datetime(2024, 1, 2, 12, 0),
            status=status,
        )

    return _make
