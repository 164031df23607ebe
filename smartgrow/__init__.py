"""
SmartGrow Mining calculation core.

Standalone package for daily income collection and referral commission
calculations. No database or framework dependencies: callers pass
snapshots and the current time, and get plain values back.

Example:
    >>> from datetime import UTC, datetime, timedelta
    >>> from smartgrow import TimeWindowCalculator, Investment
    >>>
    >>> start = datetime(2024, 1, 1, tzinfo=UTC)
    >>> investment = Investment(
    ...     id=1,
    ...     start_date=start,
    ...     total_days_collected=0,
    ...     status="active",
    ...     amount_invested="10000",
    ...     plan={"duration_days": 30, "profit_percent": "30"},
    ... )
    >>> request = TimeWindowCalculator().collect(investment, start + timedelta(hours=24))
    >>> request.days_to_collect, request.profit_per_day
    (1, Decimal('100'))
"""

from smartgrow.core import (
    CollectionRejected,
    CollectionRequest,
    CollectionResponse,
    CommissionAggregator,
    CommissionLedgerEntry,
    CommissionPayout,
    DepositRequest,
    DepositType,
    DepositValidator,
    EarningsSummary,
    InvalidRecord,
    Investment,
    InvestmentStats,
    InvestmentStatus,
    NoCollectableDays,
    Plan,
    PlatformSettings,
    PortfolioCalculator,
    ReferralCounts,
    ReferralEdge,
    RequestRejected,
    SmartGrowError,
    TimeWindowCalculator,
    WithdrawalCalculator,
    WithdrawalQuote,
)
from smartgrow.utils import (
    format_collection_summary,
    format_currency,
    format_date,
    format_days,
    format_percentage,
)


__version__ = "1.0.0"
__all__ = [
    # Calculators
    "TimeWindowCalculator",
    "CommissionAggregator",
    "PortfolioCalculator",
    "WithdrawalCalculator",
    "DepositValidator",
    # Models
    "Plan",
    "Investment",
    "InvestmentStatus",
    "InvestmentStats",
    "CommissionLedgerEntry",
    "CommissionPayout",
    "ReferralEdge",
    "ReferralCounts",
    "EarningsSummary",
    "PlatformSettings",
    "CollectionRequest",
    "CollectionResponse",
    "WithdrawalQuote",
    "DepositRequest",
    "DepositType",
    # Errors
    "SmartGrowError",
    "InvalidRecord",
    "NoCollectableDays",
    "CollectionRejected",
    "RequestRejected",
    # Formatters
    "format_currency",
    "format_percentage",
    "format_days",
    "format_date",
    "format_collection_summary",
]
