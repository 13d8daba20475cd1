"""
Base Repository.

Base class for all repositories with the shared lookup and paging queries.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from admin_shell.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with shared lookup and paging queries.

    Subclasses should set the model class:

        class UserRepository(BaseRepository[SysUser]):
            model = SysUser
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @property
    def pk(self) -> Any:
        """Primary key column of the model."""
        return inspect(self.model).primary_key[0]

    async def get_by_ids(self, ids: list[int]) -> list[ModelType]:
        if not ids:
            return []
        result = await self.session.execute(select(self.model).where(self.pk.in_(ids)))
        return list(result.scalars().all())

    async def page(
        self,
        *criteria: ColumnElement[bool],
        limit: int,
        offset: int,
        order_by: Any = None,
    ) -> tuple[list[ModelType], int]:
        """Rows matching criteria for one page, plus the total match count."""
        count_result = await self.session.execute(
            select(func.count()).select_from(self.model).where(*criteria)
        )
        total = count_result.scalar_one()

        stmt = select(self.model).where(*criteria)
        stmt = stmt.order_by(order_by if order_by is not None else self.pk)
        result = await self.session.execute(stmt.limit(limit).offset(offset))
        return list(result.scalars().all()), total
