"""
Fixtures for service tests.

Services run against a mocked AsyncSession; repositories are replaced with
AsyncMocks returning transient ORM objects.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.models import Investment, Plan, UserProfile


@pytest.fixture
def plan() -> Plan:
    """30-day plan paying 30%."""
    return Plan(
        id=3,
        name="Gold",
        duration_days=30,
        profit_percent=Decimal("30"),
        min_investment=Decimal("1000"),
        max_investment=None,
        capital_return=False,
        is_active=True,
    )


@pytest.fixture
def make_orm_investment(plan, start_time):
    """Factory for transient Investment rows owned by user 7."""
    def _make(**overrides) -> Investment:
        data = {
            "id": 1,
            "user_id": 7,
            "plan_id": plan.id,
            "amount_invested": Decimal("10000"),
            "status": "active",
            "start_date": start_time,
            "end_date": start_time + timedelta(days=plan.duration_days),
            "last_income_collection_date": None,
            "total_days_collected": 0,
            "created_at": start_time,
        }
        data.update(overrides)
        investment = Investment(**data)
        investment.plan = plan
        return investment

    return _make


@pytest.fixture
def make_user(start_time):
    """Factory for transient UserProfile rows."""
    def _make(user_id: int, referred_by: int | None = None, **overrides) -> UserProfile:
        data = {
            "id": user_id,
            "full_name": f"User {user_id}",
            "referral_code": f"REF{user_id:04d}",
            "referred_by": referred_by,
            "balance": Decimal("0"),
            "total_earned": Decimal("0"),
            "created_at": start_time,
        }
        data.update(overrides)
        return UserProfile(**data)

    return _make
