"""
Core calculators.

Income collection windows, referral commissions, portfolio totals,
deposit checks and withdrawal quotes, with the models they operate on.
"""

from smartgrow.core.commission import CommissionAggregator
from smartgrow.core.deposit import DepositValidator
from smartgrow.core.exceptions import (
    CollectionRejected,
    InvalidRecord,
    NoCollectableDays,
    RequestRejected,
    SmartGrowError,
)
from smartgrow.core.models import (
    CollectionRequest,
    CollectionResponse,
    CommissionLedgerEntry,
    CommissionPayout,
    DepositRequest,
    DepositType,
    EarningsSummary,
    Investment,
    InvestmentStats,
    InvestmentStatus,
    Plan,
    PlatformSettings,
    ReferralCounts,
    ReferralEdge,
    WithdrawalQuote,
)
from smartgrow.core.portfolio import PortfolioCalculator
from smartgrow.core.time_window import TimeWindowCalculator
from smartgrow.core.withdrawal import WithdrawalCalculator

__all__ = [
    "TimeWindowCalculator",
    "CommissionAggregator",
    "PortfolioCalculator",
    "WithdrawalCalculator",
    "DepositValidator",
    "SmartGrowError",
    "InvalidRecord",
    "NoCollectableDays",
    "CollectionRejected",
    "RequestRejected",
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
]
