"""SQL implementation of Category repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import (
    Category,
    CategoryCreate,
    CategoryFilter,
    CategoryUpdate,
)
from board.domain.repository import CategoryRepository
from board.domain.value import CategoryId
from board.persistence.mappers import row_to_category
from board.persistence.repository.base import EntityRepository
from board.persistence.tables import categories_table


class SqlCategoryRepository(EntityRepository[Category], CategoryRepository):
    """SQL implementation of CategoryRepository."""

    table = categories_table
    to_model = staticmethod(row_to_category)

    async def create(
        self, data: CategoryCreate, session: Optional[AsyncSession] = None
    ) -> Category:
        return await self._create(data.model_dump(mode="json"), session)

    async def find_by_id(
        self, category_id: CategoryId, session: Optional[AsyncSession] = None
    ) -> Optional[Category]:
        return await self._get(category_id, session)

    async def find_by_name(
        self, name: str, session: Optional[AsyncSession] = None
    ) -> Optional[Category]:
        stmt = select(categories_table).where(categories_table.c.name == name)
        return await self._fetch_one(stmt, session)

    async def exists_by_name(
        self,
        name: str,
        exclude_id: Optional[CategoryId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        return await self._exists_unique("name", name, exclude_id, session)

    async def update(
        self,
        category_id: CategoryId,
        changes: CategoryUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Category]:
        return await self._apply_changes(category_id, changes.supplied(), session)

    async def delete(
        self, category_id: CategoryId, session: Optional[AsyncSession] = None
    ) -> bool:
        return await self._delete_by_id(category_id, session)

    async def list(
        self,
        filter: Optional[CategoryFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Category]:
        return await self._list(
            filter, [categories_table.c.id.asc()], limit, offset, session
        )

    async def count(
        self,
        filter: Optional[CategoryFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        return await self._count(filter, session)
