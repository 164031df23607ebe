"""
Multi-level referral commission aggregation.

Referral levels come from the ``referred_by`` field of user profiles:
level 1 are users referred directly, level 2 are users referred by level 1
users, and so on down to level 3.

Today/yesterday earnings use UTC calendar days, unlike the rolling
24-hour windows of income collection.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from loguru import logger

from smartgrow.constants import (
    COMMISSION_SOURCE_DEPOSIT,
    COMMISSION_SOURCE_EARNINGS,
    REFERRAL_DEPTH,
)
from smartgrow.core.exceptions import InvalidRecord
from smartgrow.core.models import (
    CommissionLedgerEntry,
    CommissionPayout,
    EarningsSummary,
    PlatformSettings,
    ReferralCounts,
    ReferralEdge,
)
from smartgrow.types import Identifier
from smartgrow.utils.dates import in_window, utc_day_window


class CommissionAggregator:
    """Pure calculator for referral counts, earnings and payouts."""

    def referral_levels(
        self,
        edges: Iterable[ReferralEdge | Any],
        user_id: Identifier,
        depth: int = REFERRAL_DEPTH,
    ) -> dict[int, list[Identifier]]:
        """
        Members of the user's referral tree, per level.

        Breadth-first over ``referred_by``. Each user is placed once, at the
        shallowest level it is reached, so a corrupted graph with cycles
        cannot loop or double count.

        Args:
            edges: Referral edges (models, mappings or ORM rows)
            user_id: Root user
            depth: Number of levels to walk

        Returns:
            Dict mapping level (1..depth) to user ids in input order
        """
        children: dict[Identifier, list[Identifier]] = {}
        for edge in edges:
            edge = ReferralEdge.parse(edge)
            if edge.referred_by is None:
                continue
            children.setdefault(edge.referred_by, []).append(edge.user_id)

        visited = {user_id}
        levels: dict[int, list[Identifier]] = {}
        frontier = [user_id]

        for level in range(1, depth + 1):
            members = []
            for parent in frontier:
                for child in children.get(parent, []):
                    if child in visited:
                        logger.warning(
                            "Referral graph revisits a user, skipping",
                            extra={"root": user_id, "user_id": child, "level": level},
                        )
                        continue
                    visited.add(child)
                    members.append(child)
            levels[level] = members
            frontier = members

        return levels

    def count_by_level(
        self,
        edges: Iterable[ReferralEdge | Any],
        user_id: Identifier,
    ) -> ReferralCounts:
        """
        Count referred users on each of the three levels.

        Args:
            edges: Referral edges
            user_id: Root user

        Returns:
            ReferralCounts with level1, level2, level3
        """
        levels = self.referral_levels(edges, user_id, REFERRAL_DEPTH)
        return ReferralCounts(
            level1=len(levels[1]),
            level2=len(levels[2]),
            level3=len(levels[3]),
        )

    def aggregate_earnings(
        self,
        entries: Iterable[CommissionLedgerEntry | Any],
        now: datetime,
    ) -> EarningsSummary:
        """
        Sum completed commission entries.

        Total and per-level sums come from the same filtered set, so the
        three levels always add up to the total.

        Args:
            entries: Commission ledger entries for one referrer
            now: Current instant, used for the UTC today/yesterday windows

        Returns:
            EarningsSummary

        Raises:
            InvalidRecord: If an entry is malformed
        """
        today_window = utc_day_window(now)
        yesterday_window = utc_day_window(now, days_back=1)

        total = Decimal("0")
        today = Decimal("0")
        yesterday = Decimal("0")
        by_level = {1: Decimal("0"), 2: Decimal("0"), 3: Decimal("0")}

        for entry in entries:
            entry = CommissionLedgerEntry.parse(entry)
            if not entry.is_completed:
                continue

            total += entry.amount
            by_level[entry.level] += entry.amount

            if in_window(entry.created_at, today_window):
                today += entry.amount
            elif in_window(entry.created_at, yesterday_window):
                yesterday += entry.amount

        return EarningsSummary(
            total=total,
            today=today,
            yesterday=yesterday,
            level1=by_level[1],
            level2=by_level[2],
            level3=by_level[3],
        )

    def referrer_chain(
        self,
        edges: Iterable[ReferralEdge | Any],
        user_id: Identifier,
        depth: int = REFERRAL_DEPTH,
    ) -> list[Identifier]:
        """
        Upline of a user: direct referrer first.

        Stops at the first user without a referrer, after ``depth`` steps, or
        when the chain comes back to a user already seen.

        Args:
            edges: Referral edges
            user_id: User whose upline is requested
            depth: Maximum number of referrers

        Returns:
            List of referrer ids, level 1 first
        """
        referrer_of: dict[Identifier, Identifier | None] = {}
        for edge in edges:
            edge = ReferralEdge.parse(edge)
            referrer_of[edge.user_id] = edge.referred_by

        chain: list[Identifier] = []
        seen = {user_id}
        current = user_id
        while len(chain) < depth:
            referrer = referrer_of.get(current)
            if referrer is None:
                break
            if referrer in seen:
                logger.warning(
                    "Referral chain loops back, stopping",
                    extra={"user_id": user_id, "referrer_id": referrer},
                )
                break
            chain.append(referrer)
            seen.add(referrer)
            current = referrer

        return chain

    def distribute(
        self,
        amount: Decimal,
        chain: list[Identifier],
        referred_user_id: Identifier,
        settings: PlatformSettings,
        source: str = COMMISSION_SOURCE_EARNINGS,
    ) -> list[CommissionPayout]:
        """
        Split a commission over the referrer chain.

        Deposits pay the direct referrer only, at the level 1 deposit rate.
        Earnings pay up to three levels at their level rates.

        Args:
            amount: Deposit or earnings amount the commission is based on
            chain: Referrer ids, level 1 first (see referrer_chain)
            referred_user_id: User whose deposit or earning triggers the payout
            settings: Platform commission rates
            source: "deposit" or "earnings"

        Returns:
            Payouts with a positive amount, level 1 first

        Raises:
            InvalidRecord: If amount is negative or source is unknown
        """
        if amount < 0:
            raise InvalidRecord(f"amount must be non-negative, got {amount}", "commission")

        if source == COMMISSION_SOURCE_DEPOSIT:
            rates = {1: settings.referral_l1_deposit_percent}
        elif source == COMMISSION_SOURCE_EARNINGS:
            rates = {level: settings.earnings_percent(level) for level in (1, 2, 3)}
        else:
            raise InvalidRecord(f"unknown commission source {source!r}", "commission")

        payouts = []
        for level, referrer_id in enumerate(chain[:REFERRAL_DEPTH], start=1):
            percent = rates.get(level)
            if not percent:
                continue
            commission = amount * percent / 100
            if commission <= 0:
                continue
            payouts.append(
                CommissionPayout(
                    referrer_id=referrer_id,
                    referred_user_id=referred_user_id,
                    level=level,
                    percent=percent,
                    amount=commission,
                    source=source,
                )
            )
        return payouts
