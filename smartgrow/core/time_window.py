"""
Daily income eligibility and collection-window calculations.

Collection availability is measured in whole 24-hour periods from an
anchor: the last collection, or the investment start when nothing has been
collected yet. A new day becomes collectable exactly 24 hours after the
anchor, not at midnight.

This module performs no I/O. Applying a collection is the job of the
mutation endpoint; its response is the only thing trusted afterwards.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Any

from smartgrow.constants import COLLECTION_PERIOD
from smartgrow.core.exceptions import CollectionRejected, NoCollectableDays
from smartgrow.core.models import (
    CollectionRequest,
    CollectionResponse,
    Investment,
    InvestmentStatus,
)
from smartgrow.types import CollectionResponseDict
from smartgrow.utils.dates import ensure_utc, whole_periods_between


class TimeWindowCalculator:
    """
    Pure calculator for investment income collection.

    Every method takes ``now`` explicitly, so results depend only on the
    arguments.
    """

    def available_days(self, investment: Investment | Any, now: datetime) -> int:
        """
        Number of whole unclaimed days available for collection.

        Does not look at the investment status; use can_collect() to gate
        the collect action.

        Args:
            investment: Investment snapshot (model, mapping or ORM row)
            now: Current instant

        Returns:
            min(elapsed whole days since anchor, days left in the plan)

        Raises:
            InvalidRecord: If the snapshot is malformed

        Example:
            >>> calc = TimeWindowCalculator()
            >>> calc.available_days(investment, investment.start_date + timedelta(hours=24))
            1
        """
        investment = Investment.parse(investment)
        anchor = investment.last_income_collection_date or investment.start_date
        elapsed_days = whole_periods_between(anchor, now, COLLECTION_PERIOD)
        return max(0, min(elapsed_days, investment.remaining_days))

    def can_collect(self, investment: Investment | Any, now: datetime) -> bool:
        """
        Whether the collect action should be enabled.

        Args:
            investment: Investment snapshot
            now: Current instant

        Returns:
            True only for active investments with at least one available day
        """
        investment = Investment.parse(investment)
        if investment.status != InvestmentStatus.ACTIVE:
            return False
        return self.available_days(investment, now) > 0

    def profit_per_day(self, investment: Investment | Any) -> Decimal:
        """
        Profit paid per collected day.

        Formula: (amount_invested * profit_percent / 100) / duration_days

        Example:
            >>> calc.profit_per_day(investment)  # 10000 at 30% over 30 days
            Decimal('100')
        """
        investment = Investment.parse(investment)
        plan = investment.plan
        total_profit = investment.amount_invested * plan.profit_percent / 100
        return total_profit / plan.duration_days

    def collect(self, investment: Investment | Any, now: datetime) -> CollectionRequest:
        """
        Prepare a collection request for the mutation endpoint.

        Nothing is mutated here. Submitting a request built from stale data
        is safe: the endpoint recomputes availability under a row lock and
        rejects what is no longer collectable.

        Args:
            investment: Investment snapshot
            now: Current instant

        Returns:
            CollectionRequest with days_to_collect and profit_per_day

        Raises:
            NoCollectableDays: If no whole day is available
            InvalidRecord: If the snapshot is malformed
        """
        investment = Investment.parse(investment)
        days = self.available_days(investment, now)
        if days == 0:
            raise NoCollectableDays(investment.id)

        return CollectionRequest(
            investment_id=investment.id,
            days_to_collect=days,
            profit_per_day=self.profit_per_day(investment),
        )

    def handle_collection_response(
        self,
        response: CollectionResponse | CollectionResponseDict,
        investment_id=None,
    ) -> CollectionResponse:
        """
        Interpret the endpoint response.

        Args:
            response: Endpoint response (model or raw dict)
            investment_id: Investment the response belongs to, for error context

        Returns:
            The validated response when the collection succeeded

        Raises:
            CollectionRejected: With the endpoint's error message, unchanged
        """
        if not isinstance(response, CollectionResponse):
            response = CollectionResponse.model_validate(response)

        if not response.success:
            raise CollectionRejected(
                response.error or "Collection failed", investment_id=investment_id
            )
        return response

    def progress_percent(
        self,
        start_date: datetime,
        end_date: datetime | None,
        now: datetime,
    ) -> int:
        """
        Elapsed share of the investment term, 0-100.

        Args:
            start_date: Investment start
            end_date: Investment end, or None when unknown
            now: Current instant

        Returns:
            Rounded (half up) percentage clamped to 0-100; 0 without an end
            date, 100 for a zero-length term
        """
        if end_date is None:
            return 0

        start = ensure_utc(start_date)
        end = ensure_utc(end_date)
        total = (end - start).total_seconds()
        if total <= 0:
            return 100

        elapsed = (ensure_utc(now) - start).total_seconds()
        ratio = min(100.0, max(0.0, elapsed / total * 100))
        return math.floor(ratio + 0.5)

    def days_remaining(self, end_date: datetime | None, now: datetime) -> int:
        """
        Days left until the investment ends, rounded up.

        Returns:
            max(0, ceil((end_date - now) / 24h)); 0 without an end date
        """
        if end_date is None:
            return 0

        remaining = ensure_utc(end_date) - ensure_utc(now)
        days = math.ceil(remaining / COLLECTION_PERIOD)
        return max(0, days)
