"""
Portfolio-level calculations over a user's investments.

Covers dashboard totals, term expiry and plan purchase limits.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from smartgrow.core.exceptions import RequestRejected
from smartgrow.core.models import (
    Investment,
    InvestmentStats,
    InvestmentStatus,
    Plan,
    PlatformSettings,
)
from smartgrow.utils.dates import ensure_utc


class PortfolioCalculator:
    """Pure calculator for investment portfolios."""

    def total_profit(self, investment: Investment | Any) -> Decimal:
        """
        Profit paid over the full plan duration.

        Formula: amount_invested * profit_percent / 100
        """
        investment = Investment.parse(investment)
        return investment.amount_invested * investment.plan.profit_percent / 100

    def calculate_stats(self, investments: Iterable[Investment | Any]) -> InvestmentStats:
        """
        Dashboard totals.

        Earnings are counted for completed investments only.

        Args:
            investments: Investment snapshots of one user

        Returns:
            InvestmentStats
        """
        stats = InvestmentStats()
        for investment in investments:
            investment = Investment.parse(investment)
            stats.total_invested += investment.amount_invested

            if investment.status == InvestmentStatus.ACTIVE:
                stats.active_investments += 1
            elif investment.status == InvestmentStatus.COMPLETED:
                stats.completed_investments += 1
                stats.total_earnings += self.total_profit(investment)

        return stats

    def is_expired(self, investment: Investment | Any, now: datetime) -> bool:
        """Active investment whose end date has passed."""
        investment = Investment.parse(investment)
        if investment.status != InvestmentStatus.ACTIVE:
            return False
        if investment.end_date is None:
            return False
        return investment.end_date <= ensure_utc(now)

    def validate_purchase(
        self,
        plan: Plan | Any,
        amount: Decimal,
        balance: Decimal,
        settings: PlatformSettings,
    ) -> Decimal:
        """
        Check an investment amount against plan and balance limits.

        The plan maximum applies when set, otherwise the platform maximum.

        Args:
            plan: Plan being purchased
            amount: Requested investment amount
            balance: Current user balance
            settings: Platform settings

        Returns:
            The validated amount

        Raises:
            RequestRejected: If the amount violates a limit
        """
        plan = Plan.parse(plan)

        if amount <= 0:
            raise RequestRejected("Investment amount must be positive", "invalid_amount")

        if plan.min_investment is not None and amount < plan.min_investment:
            raise RequestRejected(
                f"Minimum investment is {plan.min_investment}", "below_minimum"
            )

        maximum = plan.max_investment or settings.max_investment_amount
        if amount > maximum:
            raise RequestRejected(f"Maximum investment is {maximum}", "above_maximum")

        if amount > balance:
            raise RequestRejected("Insufficient balance", "insufficient_balance")

        return amount
