"""Category domain service."""

from typing import List, Optional

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import (
    CategoryInUse,
    CategoryNotFound,
    DuplicateCategoryName,
    ForeignKeyViolation,
    UniqueViolation,
)
from board.domain.model import Category, CategoryCreate, CategoryUpdate, PostFilter
from board.domain.repository import CategoryRepository, PostRepository
from board.domain.value import CategoryId
from board.persistence.database import transaction

from .base import Service


class CategoryService(Service):
    """Domain service for category operations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        category_repository: CategoryRepository,
        post_repository: PostRepository,
    ) -> None:
        self.session_factory = session_factory
        self.category_repository = category_repository
        self.post_repository = post_repository

    async def create_category(
        self, name: str, description: Optional[str] = None
    ) -> Category:
        """Create a category.

        Raises:
            DuplicateCategoryName: If a category with this name exists
        """
        with logfire.span("category_service.create_category", name=name):
            async with transaction(self.session_factory) as session:
                if await self.category_repository.exists_by_name(name, session=session):
                    logfire.warn("Duplicate category name", name=name)
                    raise DuplicateCategoryName(name)
                try:
                    category = await self.category_repository.create(
                        CategoryCreate(name=name, description=description), session
                    )
                except UniqueViolation as e:
                    raise DuplicateCategoryName(name) from e
            logfire.info("Category created", category_id=category.id, name=name)
            return category

    async def update_category(
        self, category_id: CategoryId, changes: CategoryUpdate
    ) -> Category:
        """Rename or re-describe a category.

        Raises:
            CategoryNotFound: If category not found
            DuplicateCategoryName: If another category has the new name
        """
        with logfire.span("category_service.update_category", category_id=category_id):
            async with transaction(self.session_factory) as session:
                category = await self._load(category_id, session)
                name = changes.supplied().get("name")
                if (
                    name is not None
                    and name != category.name
                    and await self.category_repository.exists_by_name(
                        name, exclude_id=category_id, session=session
                    )
                ):
                    raise DuplicateCategoryName(name)
                try:
                    updated = await self.category_repository.update(
                        category_id, changes, session
                    )
                except UniqueViolation as e:
                    raise DuplicateCategoryName(name or category.name) from e
            logfire.info("Category updated", category_id=category_id)
            return updated or category

    async def delete_category(self, category_id: CategoryId) -> None:
        """Delete a category that no post references.

        Raises:
            CategoryNotFound: If category not found
            CategoryInUse: If posts still belong to the category
        """
        with logfire.span("category_service.delete_category", category_id=category_id):
            async with transaction(self.session_factory) as session:
                await self._load(category_id, session)
                posts = await self.post_repository.count(
                    PostFilter(category_id=category_id), session
                )
                if posts:
                    logfire.warn(
                        "Category still referenced", category_id=category_id, posts=posts
                    )
                    raise CategoryInUse(category_id)
                try:
                    await self.category_repository.delete(category_id, session)
                except ForeignKeyViolation as e:
                    raise CategoryInUse(category_id) from e
            logfire.info("Category deleted", category_id=category_id)

    async def get_by_id(self, category_id: CategoryId) -> Category:
        category = await self.category_repository.find_by_id(category_id)
        if category is None:
            raise CategoryNotFound(category_id)
        return category

    async def get_by_name(self, name: str) -> Category:
        category = await self.category_repository.find_by_name(name)
        if category is None:
            raise CategoryNotFound(name)
        return category

    async def list_categories(self) -> List[Category]:
        with logfire.span("category_service.list_categories"):
            return await self.category_repository.list()

    async def _load(self, category_id: CategoryId, session: AsyncSession) -> Category:
        category = await self.category_repository.find_by_id(category_id, session)
        if category is None:
            logfire.warn("Category not found", category_id=category_id)
            raise CategoryNotFound(category_id)
        return category
