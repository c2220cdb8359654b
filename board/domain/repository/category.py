"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model.category import (
    Category,
    CategoryCreate,
    CategoryFilter,
    CategoryUpdate,
)
from board.domain.value import CategoryId


class CategoryRepository(ABC):
    """Repository for Category entity."""

    @abstractmethod
    async def create(
        self, data: CategoryCreate, session: Optional[AsyncSession] = None
    ) -> Category:
        pass

    @abstractmethod
    async def find_by_id(
        self, category_id: CategoryId, session: Optional[AsyncSession] = None
    ) -> Optional[Category]:
        pass

    @abstractmethod
    async def find_by_name(
        self, name: str, session: Optional[AsyncSession] = None
    ) -> Optional[Category]:
        pass

    @abstractmethod
    async def exists_by_name(
        self,
        name: str,
        exclude_id: Optional[CategoryId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        pass

    @abstractmethod
    async def update(
        self,
        category_id: CategoryId,
        changes: CategoryUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Category]:
        pass

    @abstractmethod
    async def delete(
        self, category_id: CategoryId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Delete a category.

        Raises:
            ForeignKeyViolation: If posts still reference the category
        """
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[CategoryFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Category]:
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[CategoryFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass
