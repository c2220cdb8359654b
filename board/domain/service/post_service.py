"""Post domain service."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import (
    CategoryNotFound,
    PostNotFound,
    UniqueViolation,
    UserNotFound,
)
from board.domain.model import CommentFilter, Post, PostCreate, PostFilter, PostUpdate, Tag
from board.domain.repository import (
    CategoryRepository,
    CommentRepository,
    LikeRepository,
    PostRepository,
    PostTagRepository,
    TagRepository,
    UserRepository,
)
from board.domain.value import CategoryId, LikeTargetType, PostId, UserId
from board.persistence.database import transaction

from .base import Service, ensure_can_write
from .tag_service import TagService


def normalize_tag_names(names: Sequence[str]) -> List[str]:
    """Strip names, drop blanks and repeat occurrences, keep first-seen order."""
    seen: List[str] = []
    for raw in names:
        name = raw.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        post_repository: PostRepository,
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        tag_repository: TagRepository,
        post_tag_repository: PostTagRepository,
        tag_service: TagService,
    ) -> None:
        """Initialize post service.

        Args:
            session_factory: Factory for units of work
            post_repository: Post repository
            user_repository: User repository
            category_repository: Category repository
            comment_repository: Comment repository
            like_repository: Like repository
            tag_repository: Tag repository
            post_tag_repository: Post/tag link repository
            tag_service: Tag domain service
        """
        self.session_factory = session_factory
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.category_repository = category_repository
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.tag_repository = tag_repository
        self.post_tag_repository = post_tag_repository
        self.tag_service = tag_service

    async def create_post(
        self,
        user_id: UserId,
        category_id: CategoryId,
        title: str,
        content: str,
        tags: Sequence[str] = (),
    ) -> Post:
        """Create a new post, optionally tagged.

        Args:
            user_id: Author
            category_id: Category the post belongs to
            title: Post title
            content: Post body
            tags: Tag names, created on first use

        Returns:
            Created post

        Raises:
            UserNotFound: If the author does not exist
            UserInactive: If the author is suspended or deleted
            CategoryNotFound: If the category does not exist
        """
        with logfire.span(
            "post_service.create_post", user_id=user_id, category_id=category_id
        ):
            async with transaction(self.session_factory) as session:
                author = await self.user_repository.find_by_id(user_id, session)
                if author is None:
                    raise UserNotFound(user_id)
                ensure_can_write(author)

                if await self.category_repository.find_by_id(category_id, session) is None:
                    logfire.warn("Post in non-existent category", category_id=category_id)
                    raise CategoryNotFound(category_id)

                post = await self.post_repository.create(
                    PostCreate(
                        title=title,
                        content=content,
                        user_id=user_id,
                        category_id=category_id,
                    ),
                    session,
                )
                if tags:
                    await self._attach(post.id, tags, session)

            logfire.info("Post created", post_id=post.id, user_id=user_id)
            return post

    async def get_post(self, post_id: PostId) -> Post:
        """Get post by ID.

        Raises:
            PostNotFound: If post not found
        """
        with logfire.span("post_service.get_post", post_id=post_id):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=post_id)
                raise PostNotFound(post_id)
            return post

    async def list_posts(
        self,
        filter: Optional[PostFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Post]:
        """List posts, newest first."""
        with logfire.span("post_service.list_posts", limit=limit, offset=offset):
            posts = await self.post_repository.list(filter, limit, offset)
            logfire.info("Posts retrieved", count=len(posts))
            return posts

    async def count_posts(self, filter: Optional[PostFilter] = None) -> int:
        return await self.post_repository.count(filter)

    async def update_post(self, post_id: PostId, changes: PostUpdate) -> Post:
        """Update title, content or category of a post.

        Raises:
            PostNotFound: If post not found
            UserInactive: If the author is suspended or deleted
            CategoryNotFound: If the new category does not exist
        """
        with logfire.span("post_service.update_post", post_id=post_id):
            async with transaction(self.session_factory) as session:
                post = await self._load(post_id, session)
                author = await self.user_repository.find_by_id(post.user_id, session)
                if author is None:
                    raise UserNotFound(post.user_id)
                ensure_can_write(author)

                if (
                    changes.category_id is not None
                    and await self.category_repository.find_by_id(
                        changes.category_id, session
                    )
                    is None
                ):
                    raise CategoryNotFound(changes.category_id)

                updated = await self.post_repository.update(post_id, changes, session)
            logfire.info("Post updated", post_id=post_id)
            return updated or post

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post with everything hanging off it.

        The schema cascades comments and tag links. Likes carry no foreign
        key, so likes on the post and on its comments are removed here, in
        the same transaction.

        Raises:
            PostNotFound: If post not found
        """
        with logfire.span("post_service.delete_post", post_id=post_id):
            async with transaction(self.session_factory) as session:
                await self._load(post_id, session)
                comment_ids = [
                    comment.id
                    for comment in await self.comment_repository.list(
                        CommentFilter(post_id=post_id), session=session
                    )
                ]
                removed = await self.like_repository.delete_by_targets(
                    LikeTargetType.COMMENT, comment_ids, session
                )
                removed += await self.like_repository.delete_by_targets(
                    LikeTargetType.POST, [post_id], session
                )
                await self.post_repository.delete(post_id, session)

            logfire.info(
                "Post deleted",
                post_id=post_id,
                comments=len(comment_ids),
                likes_removed=removed,
            )

    async def attach_tags(self, post_id: PostId, names: Sequence[str]) -> List[Tag]:
        """Tag a post, creating unknown tags.

        Re-attaching a tag the post already has is a no-op.

        Args:
            post_id: Post to tag
            names: Tag names

        Returns:
            All tags on the post after the change

        Raises:
            PostNotFound: If post not found
        """
        with logfire.span("post_service.attach_tags", post_id=post_id, names=list(names)):
            async with transaction(self.session_factory) as session:
                await self._load(post_id, session)
                await self._attach(post_id, names, session)
                return await self.post_tag_repository.find_tags_for_post(post_id, session)

    async def detach_tag(self, post_id: PostId, name: str) -> bool:
        """Remove a tag from a post.

        Returns:
            True if the post carried the tag
        """
        with logfire.span("post_service.detach_tag", post_id=post_id, name=name):
            async with transaction(self.session_factory) as session:
                await self._load(post_id, session)
                tag = await self.tag_repository.find_by_name(name, session)
                if tag is None:
                    return False
                return await self.post_tag_repository.delete(post_id, tag.id, session)

    async def get_tags(self, post_id: PostId) -> List[Tag]:
        async with transaction(self.session_factory) as session:
            await self._load(post_id, session)
            return await self.post_tag_repository.find_tags_for_post(post_id, session)

    async def _attach(
        self, post_id: PostId, names: Sequence[str], session: AsyncSession
    ) -> None:
        for name in normalize_tag_names(names):
            tag = await self.tag_service.find_or_create(name, session)
            if await self.post_tag_repository.exists(post_id, tag.id, session):
                continue
            try:
                async with session.begin_nested():
                    await self.post_tag_repository.create(post_id, tag.id, session)
            except UniqueViolation:
                # Linked concurrently; the link exists either way
                logfire.info("Tag already linked", post_id=post_id, tag_id=tag.id)

    async def _load(self, post_id: PostId, session: AsyncSession) -> Post:
        post = await self.post_repository.find_by_id(post_id, session)
        if post is None:
            logfire.warn("Post not found", post_id=post_id)
            raise PostNotFound(post_id)
        return post
