"""SQL implementation of Like repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import Like, LikeCreate, LikeFilter
from board.domain.repository import LikeRepository
from board.domain.value import LikeId, LikeTargetType, UserId
from board.persistence.mappers import row_to_like
from board.persistence.repository.base import EntityRepository
from board.persistence.tables import likes_table


class SqlLikeRepository(EntityRepository[Like], LikeRepository):
    """SQL implementation of LikeRepository."""

    table = likes_table
    to_model = staticmethod(row_to_like)

    def _target(
        self, user_id: UserId, target_type: LikeTargetType, target_id: int
    ):
        return [
            likes_table.c.user_id == user_id,
            likes_table.c.target_type == target_type.value,
            likes_table.c.target_id == target_id,
        ]

    async def create(
        self, data: LikeCreate, session: Optional[AsyncSession] = None
    ) -> Like:
        """Save a like (create)."""
        return await self._create(data.model_dump(mode="json"), session)

    async def find_by_id(
        self, like_id: LikeId, session: Optional[AsyncSession] = None
    ) -> Optional[Like]:
        """Find a like by ID."""
        return await self._get(like_id, session)

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: int,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Like]:
        """Find a user's like on a specific item."""
        stmt = select(likes_table).where(*self._target(user_id, target_type, target_id))
        return await self._fetch_one(stmt, session)

    async def delete(
        self, like_id: LikeId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Delete a like."""
        return await self._delete_by_id(like_id, session)

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: int,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        """Delete a like by user and target."""
        removed = await self._delete(
            self._target(user_id, target_type, target_id), session
        )
        return removed > 0

    async def delete_by_targets(
        self,
        target_type: LikeTargetType,
        target_ids: Sequence[int],
        session: Optional[AsyncSession] = None,
    ) -> int:
        """Delete every like on the given targets (batch)."""
        if not target_ids:
            return 0

        return await self._delete(
            [
                likes_table.c.target_type == target_type.value,
                likes_table.c.target_id.in_(list(target_ids)),
            ],
            session,
        )

    async def list(
        self,
        filter: Optional[LikeFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Like]:
        return await self._list(filter, [likes_table.c.id.asc()], limit, offset, session)

    async def count(
        self,
        filter: Optional[LikeFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        return await self._count(filter, session)
