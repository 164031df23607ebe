"""
Base repository.

Shared lookups, row locking and inserts for the SmartGrow tables.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Async data access for one mapped table.

    Writes only flush; committing is left to the service transaction.

    Example:
        class PlanRepository(BaseRepository[Plan]):
            def __init__(self, session: AsyncSession):
                super().__init__(Plan, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    async def get_by_id(self, id: int) -> ModelType | None:
        """Row by primary key, or None."""
        return await self.session.get(self.model, id)

    async def get_for_update(self, id: int, **filters: Any) -> ModelType | None:
        """
        Row by primary key, locked with SELECT ... FOR UPDATE.

        Only this model's table is locked (FOR UPDATE OF <table>), so eager
        joins to other tables are allowed. The lock is held until the
        surrounding transaction ends, so balance and collection updates made
        on the returned row cannot interleave.

        Args:
            id: Primary key
            **filters: Extra equality filters, e.g. status="pending"

        Returns:
            Locked row or None if not found or not matching the filters
        """
        stmt = (
            select(self.model)
            .where(self.model.id == id)
            .filter_by(**filters)
            .with_for_update(of=self.model)
        )
        result = await self.session.execute(stmt)
        # unique() is required for models with joined eager loads
        return result.unique().scalar_one_or_none()

    async def find_by(self, **filters: Any) -> list[ModelType]:
        """
        Rows matching equality filters.

        Args:
            **filters: Column filters, e.g. is_active=True

        Returns:
            List of matching rows
        """
        stmt = select(self.model).filter_by(**filters)
        result = await self.session.execute(stmt)
        return list(result.unique().scalars().all())

    async def create(self, **data: Any) -> ModelType:
        """
        Insert a row and flush it so generated columns are populated.

        Args:
            **data: Column values

        Returns:
            Created row
        """
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity
