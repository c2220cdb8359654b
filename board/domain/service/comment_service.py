"""Comment domain service."""

from typing import List, Optional

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import CommentNotFound, InvalidParent, PostNotFound, UserNotFound
from board.domain.model import Comment, CommentCreate, CommentFilter, CommentUpdate
from board.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)
from board.domain.value import CommentId, LikeTargetType, PostId, UserId
from board.persistence.database import transaction

from .base import Service, ensure_can_write


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        like_repository: LikeRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            session_factory: Factory for units of work
            comment_repository: Comment repository
            post_repository: Post repository
            user_repository: User repository
            like_repository: Like repository
        """
        self.session_factory = session_factory
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.like_repository = like_repository

    async def create(
        self,
        post_id: PostId,
        user_id: UserId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment or a reply.

        A reply must point at a top-level comment of the same post.

        Args:
            post_id: Post being commented on
            user_id: Author
            content: Comment text
            parent_id: Comment being replied to

        Returns:
            Created comment

        Raises:
            UserNotFound: If the author does not exist
            UserInactive: If the author is suspended or deleted
            PostNotFound: If the post does not exist
            InvalidParent: If the parent is missing, on another post, or a reply
        """
        with logfire.span(
            "comment_service.create",
            post_id=post_id,
            user_id=user_id,
            parent_id=parent_id,
        ):
            async with transaction(self.session_factory) as session:
                author = await self.user_repository.find_by_id(user_id, session)
                if author is None:
                    raise UserNotFound(user_id)
                ensure_can_write(author)

                if await self.post_repository.find_by_id(post_id, session) is None:
                    logfire.warn("Comment on non-existent post", post_id=post_id)
                    raise PostNotFound(post_id)

                if parent_id is not None:
                    await self._check_parent(parent_id, post_id, session)

                comment = await self.comment_repository.create(
                    CommentCreate(
                        content=content,
                        post_id=post_id,
                        user_id=user_id,
                        parent_id=parent_id,
                    ),
                    session,
                )

            logfire.info(
                "Comment created",
                comment_id=comment.id,
                post_id=post_id,
                is_reply=comment.is_reply,
            )
            return comment

    async def get_by_id(self, comment_id: CommentId) -> Comment:
        """Get comment by ID.

        Raises:
            CommentNotFound: If comment not found
        """
        with logfire.span("comment_service.get_by_id", comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=comment_id)
                raise CommentNotFound(comment_id)
            return comment

    async def update_content(self, comment_id: CommentId, content: str) -> Comment:
        """Replace the text of a comment.

        Raises:
            CommentNotFound: If comment not found
            UserInactive: If the author is suspended or deleted
        """
        with logfire.span("comment_service.update_content", comment_id=comment_id):
            async with transaction(self.session_factory) as session:
                comment = await self._load(comment_id, session)
                author = await self.user_repository.find_by_id(comment.user_id, session)
                if author is None:
                    raise UserNotFound(comment.user_id)
                ensure_can_write(author)
                updated = await self.comment_repository.update(
                    comment_id, CommentUpdate(content=content), session
                )
            logfire.info("Comment updated", comment_id=comment_id)
            return updated or comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and its replies.

        Replies cascade in the schema; likes on the comment and its replies
        are removed here.

        Raises:
            CommentNotFound: If comment not found
        """
        with logfire.span("comment_service.delete", comment_id=comment_id):
            async with transaction(self.session_factory) as session:
                await self._load(comment_id, session)
                replies = await self.comment_repository.list(
                    CommentFilter(parent_id=comment_id), session=session
                )
                removed = await self.like_repository.delete_by_targets(
                    LikeTargetType.COMMENT,
                    [comment_id, *(reply.id for reply in replies)],
                    session,
                )
                await self.comment_repository.delete(comment_id, session)
            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                replies=len(replies),
                likes_removed=removed,
            )

    async def list_for_post(
        self,
        post_id: PostId,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Comment]:
        """List every comment and reply on a post, oldest first."""
        with logfire.span("comment_service.list_for_post", post_id=post_id):
            comments = await self.comment_repository.list(
                CommentFilter(post_id=post_id), limit, offset
            )
            logfire.info("Comments retrieved", post_id=post_id, count=len(comments))
            return comments

    async def list_replies(self, comment_id: CommentId) -> List[Comment]:
        return await self.comment_repository.list(CommentFilter(parent_id=comment_id))

    async def count_for_post(self, post_id: PostId) -> int:
        return await self.comment_repository.count(CommentFilter(post_id=post_id))

    async def _check_parent(
        self, parent_id: CommentId, post_id: PostId, session: AsyncSession
    ) -> None:
        parent = await self.comment_repository.find_by_id(parent_id, session)
        if parent is None:
            raise InvalidParent(parent_id, "parent comment does not exist")
        if parent.post_id != post_id:
            raise InvalidParent(parent_id, "parent comment belongs to another post")
        if parent.is_reply:
            logfire.warn("Reply to a reply rejected", parent_id=parent_id)
            raise InvalidParent(parent_id, "replies cannot have replies")

    async def _load(self, comment_id: CommentId, session: AsyncSession) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id, session)
        if comment is None:
            logfire.warn("Comment not found", comment_id=comment_id)
            raise CommentNotFound(comment_id)
        return comment
