"""
Admin settings repository.

Data access layer for AdminSettings model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.admin_setting import AdminSettings
from app.repositories.base import BaseRepository


class AdminSettingsRepository(BaseRepository[AdminSettings]):
    """Admin settings repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize admin settings repository."""
        super().__init__(AdminSettings, session)

    async def get_current(self) -> AdminSettings | None:
        """
        Get the most recently updated settings row.

        Returns:
            AdminSettings or None if settings were never saved
        """
        stmt = (
            select(AdminSettings)
            .order_by(AdminSettings.updated_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
