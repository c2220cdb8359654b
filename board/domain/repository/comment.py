"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model.comment import (
    Comment,
    CommentCreate,
    CommentFilter,
    CommentUpdate,
)
from board.domain.value import CommentId


class CommentRepository(ABC):
    """Repository for Comment entity."""

    @abstractmethod
    async def create(
        self, data: CommentCreate, session: Optional[AsyncSession] = None
    ) -> Comment:
        """Insert a new comment.

        The repository does not check nesting depth; that is the comment
        service's job.

        Raises:
            ForeignKeyViolation: If the post, author or parent does not exist
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> Optional[Comment]:
        pass

    @abstractmethod
    async def update(
        self,
        comment_id: CommentId,
        changes: CommentUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Comment]:
        pass

    @abstractmethod
    async def delete(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Delete a comment. Replies cascade."""
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[CommentFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Comment]:
        """List comments oldest first."""
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[CommentFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass

    @abstractmethod
    async def increment_likes(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> bool:
        pass

    @abstractmethod
    async def decrement_likes(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> bool:
        pass
