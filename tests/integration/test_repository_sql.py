"""
Tests for the SQL issued by repositories.

Statements are captured from the mocked session and compiled against the
PostgreSQL dialect, the production backend.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql

from app.models import Investment, UserProfile
from app.repositories.deposit_repository import DepositRepository
from app.repositories.investment_repository import InvestmentRepository
from app.repositories.user_repository import UserRepository
from app.repositories.withdrawal_repository import WithdrawalRepository

NOW = datetime(2024, 1, 2, 12, 0, tzinfo=UTC)


@pytest.fixture
def session(mock_session):
    """Mock session whose execute() returns a synchronous result object."""
    mock_session.execute.return_value = MagicMock()
    return mock_session


def executed_sql(session, call: int = -1) -> str:
    """The statement passed to session.execute, compiled for PostgreSQL."""
    stmt = session.execute.await_args_list[call].args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestRowLocks:
    """Tests for SELECT ... FOR UPDATE statements."""

    @pytest.mark.asyncio
    async def test_investment_lock_skips_plan_table(self, session):
        """Locking an investment locks only its own table, joined to its plan."""
        await InvestmentRepository(session).get_for_update(1)

        sql = executed_sql(session)

        assert sql.endswith("FOR UPDATE OF investments")
        assert "LEFT OUTER JOIN" not in sql
        assert "JOIN plans AS plans_1 ON plans_1.id = investments.plan_id" in sql

    @pytest.mark.asyncio
    async def test_user_lock(self, session):
        """User balance locks target user_profiles."""
        await UserRepository(session).get_for_update(7)

        sql = executed_sql(session)

        assert sql.endswith("FOR UPDATE OF user_profiles")
        assert "JOIN" not in sql

    @pytest.mark.asyncio
    async def test_lock_with_status_filter(self, session):
        """Extra filters narrow the locked row to pending ones."""
        await DepositRepository(session).get_for_update(5, status="pending")

        sql = executed_sql(session)

        assert "deposits.id = " in sql
        assert "deposits.status = " in sql
        assert sql.endswith("FOR UPDATE OF deposits")

    @pytest.mark.asyncio
    async def test_withdrawal_lock(self, session):
        """Withdrawal reviews lock the withdrawal row."""
        await WithdrawalRepository(session).get_for_update(5, status="pending")

        assert executed_sql(session).endswith("FOR UPDATE OF withdrawals")


class TestQueries:
    """Tests for read and bulk update statements."""

    @pytest.mark.asyncio
    async def test_downline_level_query(self, session):
        """Each level selects users referred by the previous level."""
        await UserRepository(session).get_downline(1)

        sql = executed_sql(session, 0)

        assert "user_profiles.referred_by IN" in sql
        assert "ORDER BY user_profiles.created_at DESC" in sql
        assert "FOR UPDATE" not in sql

    @pytest.mark.asyncio
    async def test_complete_expired(self, session):
        """Only active investments past their end date are completed."""
        session.execute.return_value = MagicMock(rowcount=2)

        count = await InvestmentRepository(session).complete_expired(7, NOW)

        sql = executed_sql(session)
        assert count == 2
        assert sql.startswith("UPDATE investments SET status=")
        assert "investments.user_id = " in sql
        assert "investments.status = " in sql
        assert "investments.end_date IS NOT NULL" in sql
        assert "investments.end_date <= " in sql

    @pytest.mark.asyncio
    async def test_user_deposits_page(self, session):
        """Deposit history is paged newest first."""
        await DepositRepository(session).get_user_deposits(7, limit=10, offset=20)

        sql = executed_sql(session)

        assert "WHERE deposits.user_id = " in sql
        assert "ORDER BY deposits.created_at DESC" in sql
        assert "LIMIT" in sql
        assert "OFFSET" in sql

    @pytest.mark.asyncio
    async def test_pending_withdrawals(self, session):
        """The review queue lists pending withdrawals oldest first."""
        await WithdrawalRepository(session).get_pending()

        sql = executed_sql(session)

        assert "WHERE withdrawals.status = " in sql
        assert "ORDER BY withdrawals.created_at ASC" in sql


class TestRelationshipLoading:
    """Test relationship loader settings."""

    def test_plan_is_inner_joined(self):
        """Every investment has a plan, so the eager load is an inner join."""
        plan = inspect(Investment).relationships["plan"]

        assert plan.lazy == "joined"
        assert plan.innerjoin is True

    def test_back_references_raise(self):
        """User and investment back-references are never loaded implicitly."""
        assert inspect(Investment).relationships["user"].lazy == "raise"
        assert inspect(UserProfile).relationships["investments"].lazy == "raise"
