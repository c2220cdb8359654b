"""Like domain service."""

from typing import List, Optional, Union

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import AlreadyLiked, TargetNotFound, UniqueViolation, UserNotFound
from board.domain.model import Like, LikeCreate, LikeFilter
from board.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)
from board.domain.value import LikeTargetType, UserId
from board.persistence.database import transaction

from .base import Service, ensure_can_write


class LikeService(Service):
    """Domain service for like operations.

    The only writer of the denormalized ``likes_count`` counters.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        like_repository: LikeRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize like service.

        Args:
            session_factory: Factory for units of work
            like_repository: Like repository
            post_repository: Post repository
            comment_repository: Comment repository
            user_repository: User repository
        """
        self.session_factory = session_factory
        self.like_repository = like_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.user_repository = user_repository

    def _target_repository(
        self, target_type: LikeTargetType
    ) -> Union[PostRepository, CommentRepository]:
        if target_type == LikeTargetType.POST:
            return self.post_repository
        return self.comment_repository

    async def like(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: int,
        session: Optional[AsyncSession] = None,
    ) -> Like:
        """Like a post or comment.

        Creates the like record and atomically increments the target's
        counter in the same transaction. The insert runs in a savepoint so
        a duplicate leaves an ambient transaction usable.

        Args:
            user_id: User ID
            target_type: Post or comment
            target_id: ID of the post or comment
            session: Ambient unit of work

        Returns:
            Created like

        Raises:
            UserNotFound: If the user does not exist
            UserInactive: If the user is suspended or deleted
            TargetNotFound: If the post or comment does not exist
            AlreadyLiked: If the user already likes the target
        """
        with logfire.span(
            "like_service.like",
            user_id=user_id,
            target_type=target_type.value,
            target_id=target_id,
        ):
            async with transaction(self.session_factory, session) as s:
                user = await self.user_repository.find_by_id(user_id, s)
                if user is None:
                    raise UserNotFound(user_id)
                ensure_can_write(user)

                target_repository = self._target_repository(target_type)
                if await target_repository.find_by_id(target_id, s) is None:
                    logfire.warn(
                        "Like on non-existent target",
                        target_type=target_type.value,
                        target_id=target_id,
                    )
                    raise TargetNotFound(target_type.value, target_id)

                # Will raise UniqueViolation if the like exists
                try:
                    async with s.begin_nested():
                        like = await self.like_repository.create(
                            LikeCreate(
                                user_id=user_id,
                                target_type=target_type,
                                target_id=target_id,
                            ),
                            s,
                        )
                except UniqueViolation as e:
                    logfire.warn(
                        "Duplicate like attempt",
                        user_id=user_id,
                        target_type=target_type.value,
                        target_id=target_id,
                    )
                    raise AlreadyLiked(user_id, target_type.value, target_id) from e

                await target_repository.increment_likes(target_id, s)

            logfire.info("Like added", like_id=like.id, target_type=target_type.value)
            return like

    async def unlike(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: int,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        """Remove a like.

        The counter only moves when a like row was actually deleted, so
        removing a like that does not exist is a no-op.

        Returns:
            True if a like was removed
        """
        with logfire.span(
            "like_service.unlike",
            user_id=user_id,
            target_type=target_type.value,
            target_id=target_id,
        ):
            async with transaction(self.session_factory, session) as s:
                removed = await self.like_repository.delete_by_user_and_target(
                    user_id, target_type, target_id, s
                )
                if removed:
                    await self._target_repository(target_type).decrement_likes(
                        target_id, s
                    )

            if removed:
                logfire.info("Like removed", user_id=user_id, target_id=target_id)
            else:
                logfire.info("No like to remove", user_id=user_id, target_id=target_id)
            return removed

    async def has_liked(
        self, user_id: UserId, target_type: LikeTargetType, target_id: int
    ) -> bool:
        like = await self.like_repository.find_by_user_and_target(
            user_id, target_type, target_id
        )
        return like is not None

    async def list_for_user(self, user_id: UserId) -> List[Like]:
        """List a user's likes, oldest first."""
        with logfire.span("like_service.list_for_user", user_id=user_id):
            return await self.like_repository.list(LikeFilter(user_id=user_id))

    async def count_for_target(
        self, target_type: LikeTargetType, target_id: int
    ) -> int:
        """Count like rows on a target (the source of truth for the counter)."""
        return await self.like_repository.count(
            LikeFilter(target_type=target_type, target_id=target_id)
        )
