"""
Type definitions for the calculation core.

TypedDict shapes of the view models handed to the presentation layer and
of the mutation endpoint payloads.
"""

from decimal import Decimal
from typing import TypedDict

# User, investment and ledger ids are opaque: integers in SQL, UUIDs elsewhere
Identifier = int | str


class ReferralCountsDict(TypedDict):
    """Number of referred users per tree level."""
    level1_count: int
    level2_count: int
    level3_count: int


class EarningsSummaryDict(TypedDict):
    """
    Commission earnings breakdown.

    Attributes:
        total_earnings: Sum over all completed entries
        today_earnings: Sum over the current UTC day
        yesterday_earnings: Sum over the previous UTC day
        level1_earnings: Sum over level 1 entries
        level2_earnings: Sum over level 2 entries
        level3_earnings: Sum over level 3 entries
    """
    total_earnings: Decimal
    today_earnings: Decimal
    yesterday_earnings: Decimal
    level1_earnings: Decimal
    level2_earnings: Decimal
    level3_earnings: Decimal


class CollectionRequestDict(TypedDict):
    """Payload submitted to the collect-daily-income endpoint."""
    investment_id: Identifier
    days_to_collect: int
    profit_per_day: Decimal


class CollectionResponseDict(TypedDict, total=False):
    """Response of the collect-daily-income endpoint."""
    success: bool
    profit_earned: Decimal
    days_collected: int
    is_final_collection: bool
    error: str


class CollectionStatusDict(TypedDict):
    """Per-investment collection state shown next to the Collect action."""
    investment_id: Identifier
    available_days: int
    can_collect: bool
    progress_percent: int
    days_remaining: int
    profit_per_day: Decimal
