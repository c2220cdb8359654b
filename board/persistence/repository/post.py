"""SQL implementation of Post repository."""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Post, PostCreate, PostFilter, PostUpdate
from board.domain.repository import PostRepository
from board.domain.value import PostId
from board.persistence.mappers import row_to_post
from board.persistence.repository.base import EntityRepository
from board.persistence.tables import posts_table


class SqlPostRepository(EntityRepository[Post], PostRepository):
    """SQL implementation of PostRepository."""

    table = posts_table
    to_model = staticmethod(row_to_post)

    async def create(
        self, data: PostCreate, session: Optional[AsyncSession] = None
    ) -> Post:
        """Insert a new post."""
        return await self._create(data.model_dump(mode="json"), session)

    async def find_by_id(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> Optional[Post]:
        """Find a post by ID."""
        return await self._get(post_id, session)

    async def update(
        self,
        post_id: PostId,
        changes: PostUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Post]:
        """Update post fields."""
        return await self._apply_changes(post_id, changes.supplied(), session)

    async def delete(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Delete a post."""
        return await self._delete_by_id(post_id, session)

    async def list(
        self,
        filter: Optional[PostFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Post]:
        """List posts newest first."""
        return await self._list(
            filter,
            [posts_table.c.created_at.desc(), posts_table.c.id.desc()],
            limit,
            offset,
            session,
        )

    async def count(
        self,
        filter: Optional[PostFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        """Count posts matching the filter."""
        return await self._count(filter, session)

    async def increment_likes(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Atomically increment post likes."""
        return await self._adjust_likes(post_id, 1, session)

    async def decrement_likes(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Atomically decrement post likes."""
        return await self._adjust_likes(post_id, -1, session)
