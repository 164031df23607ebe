"""
User repository.

Data access layer for UserProfile model, including referral tree reads
and balance mutations.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import UserProfile
from app.repositories.base import BaseRepository
from smartgrow.constants import REFERRAL_DEPTH


class UserRepository(BaseRepository[UserProfile]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(UserProfile, session)

    async def get_downline(
        self, user_id: int, depth: int = REFERRAL_DEPTH
    ) -> list[UserProfile]:
        """
        Users below ``user_id`` in the referral tree, level by level.

        One query per level, each selecting users referred by the previous
        level. Users already fetched are not queried again.

        Args:
            user_id: Root user ID
            depth: Number of levels to fetch

        Returns:
            Users of all fetched levels (usable as referral edges)
        """
        users: list[UserProfile] = []
        seen = {user_id}
        parent_ids = [user_id]

        for _ in range(depth):
            if not parent_ids:
                break
            stmt = (
                select(UserProfile)
                .where(UserProfile.referred_by.in_(parent_ids))
                .order_by(UserProfile.created_at.desc())
            )
            result = await self.session.execute(stmt)
            level_users = [u for u in result.scalars().all() if u.id not in seen]
            seen.update(u.id for u in level_users)
            users.extend(level_users)
            parent_ids = [u.id for u in level_users]

        logger.debug(
            "Referral downline retrieved",
            extra={"user_id": user_id, "depth": depth, "size": len(users)},
        )
        return users

    async def get_upline(
        self, user_id: int, depth: int = REFERRAL_DEPTH
    ) -> list[UserProfile]:
        """
        The user followed by their referrers, up to ``depth`` levels.

        Args:
            user_id: User ID
            depth: Number of referrers to fetch

        Returns:
            Users from ``user_id`` upwards (usable as referral edges)
        """
        chain: list[UserProfile] = []
        seen: set[int] = set()
        current_id: int | None = user_id

        while current_id is not None and current_id not in seen and len(chain) <= depth:
            user = await self.get_by_id(current_id)
            if user is None:
                break
            chain.append(user)
            seen.add(current_id)
            current_id = user.referred_by

        return chain

    async def increment_balance(
        self, user_id: int, amount: Decimal, count_as_earnings: bool = True
    ) -> UserProfile | None:
        """
        Credit a user's balance under a row lock.

        Args:
            user_id: User ID
            amount: Amount to credit (must be non-negative)
            count_as_earnings: Also add the amount to total_earned

        Returns:
            Updated user or None if not found

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Cannot credit negative amount {amount}")

        user = await self.get_for_update(user_id)
        if user is None:
            return None

        user.balance = user.balance + amount
        if count_as_earnings:
            user.total_earned = user.total_earned + amount

        await self.session.flush()
        return user

    async def decrement_balance(self, user_id: int, amount: Decimal) -> bool:
        """
        Debit a user's balance under a row lock.

        Args:
            user_id: User ID
            amount: Amount to debit (must be positive)

        Returns:
            True if debited, False if the user is missing or the balance is short
        """
        if amount <= 0:
            raise ValueError(f"Cannot debit non-positive amount {amount}")

        user = await self.get_for_update(user_id)
        if user is None or user.balance < amount:
            return False

        user.balance = user.balance - amount
        await self.session.flush()
        return True
