"""SQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Comment, CommentCreate, CommentFilter, CommentUpdate
from board.domain.model.common import Filter
from board.domain.repository import CommentRepository
from board.domain.value import CommentId
from board.persistence.mappers import row_to_comment
from board.persistence.repository.base import EntityRepository
from board.persistence.tables import comments_table


class SqlCommentRepository(EntityRepository[Comment], CommentRepository):
    """SQL implementation of CommentRepository."""

    table = comments_table
    to_model = staticmethod(row_to_comment)

    def _where(self, filter: Optional[Filter]) -> List[ColumnElement[bool]]:
        criteria = super()._where(filter)
        if isinstance(filter, CommentFilter) and filter.top_level is not None:
            parent = comments_table.c.parent_id
            criteria.append(parent.is_(None) if filter.top_level else parent.is_not(None))
        return criteria

    async def create(
        self, data: CommentCreate, session: Optional[AsyncSession] = None
    ) -> Comment:
        return await self._create(data.model_dump(mode="json"), session)

    async def find_by_id(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> Optional[Comment]:
        return await self._get(comment_id, session)

    async def update(
        self,
        comment_id: CommentId,
        changes: CommentUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Comment]:
        return await self._apply_changes(comment_id, changes.supplied(), session)

    async def delete(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> bool:
        return await self._delete_by_id(comment_id, session)

    async def list(
        self,
        filter: Optional[CommentFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Comment]:
        """List comments in thread order (oldest first)."""
        return await self._list(
            filter,
            [comments_table.c.created_at.asc(), comments_table.c.id.asc()],
            limit,
            offset,
            session,
        )

    async def count(
        self,
        filter: Optional[CommentFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        return await self._count(filter, session)

    async def increment_likes(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Atomically increment comment likes."""
        return await self._adjust_likes(comment_id, 1, session)

    async def decrement_likes(
        self, comment_id: CommentId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Atomically decrement comment likes."""
        return await self._adjust_likes(comment_id, -1, session)
