"""
Plan repository.

Data access layer for Plan model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.plan import Plan
from app.repositories.base import BaseRepository


class PlanRepository(BaseRepository[Plan]):
    """Plan repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize plan repository."""
        super().__init__(Plan, session)

    async def get_active_plans(self) -> list[Plan]:
        """Plans available for purchase."""
        return await self.find_by(is_active=True)
