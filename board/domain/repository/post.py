"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model.post import Post, PostCreate, PostFilter, PostUpdate
from board.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def create(
        self, data: PostCreate, session: Optional[AsyncSession] = None
    ) -> Post:
        """Insert a new post.

        Args:
            data: Post fields
            session: Ambient unit of work

        Returns:
            The stored post with ``likes_count`` 0

        Raises:
            ForeignKeyViolation: If the author or category does not exist
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> Optional[Post]:
        pass

    @abstractmethod
    async def update(
        self,
        post_id: PostId,
        changes: PostUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Post]:
        pass

    @abstractmethod
    async def delete(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Delete a post. Comments and tag links cascade."""
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[PostFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Post]:
        """List posts newest first."""
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[PostFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass

    @abstractmethod
    async def increment_likes(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Atomically add one to ``likes_count``.

        Returns:
            True if the post exists
        """
        pass

    @abstractmethod
    async def decrement_likes(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Atomically subtract one from ``likes_count``, never below zero."""
        pass
