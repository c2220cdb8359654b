"""Tag and post/tag link repository interfaces."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model.tag import (
    PostTag,
    PostTagFilter,
    Tag,
    TagCreate,
    TagFilter,
    TagUpdate,
)
from board.domain.value import PostId, TagId


class TagRepository(ABC):
    """Repository for Tag entity."""

    @abstractmethod
    async def create(
        self, data: TagCreate, session: Optional[AsyncSession] = None
    ) -> Tag:
        pass

    @abstractmethod
    async def find_by_id(
        self, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> Optional[Tag]:
        pass

    @abstractmethod
    async def find_by_name(
        self, name: str, session: Optional[AsyncSession] = None
    ) -> Optional[Tag]:
        pass

    @abstractmethod
    async def exists_by_name(
        self,
        name: str,
        exclude_id: Optional[TagId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        pass

    @abstractmethod
    async def update(
        self,
        tag_id: TagId,
        changes: TagUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Tag]:
        pass

    @abstractmethod
    async def delete(
        self, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> bool:
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[TagFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Tag]:
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[TagFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass


class PostTagRepository(ABC):
    """Repository for the post/tag association.

    Links have no identity beyond the (post, tag) pair, so there is no
    update operation.
    """

    @abstractmethod
    async def create(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> PostTag:
        """Link a tag to a post.

        Raises:
            UniqueViolation: If the link already exists
            ForeignKeyViolation: If the post or tag does not exist
        """
        pass

    @abstractmethod
    async def find(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> Optional[PostTag]:
        pass

    @abstractmethod
    async def exists(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> bool:
        pass

    @abstractmethod
    async def delete(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> bool:
        pass

    @abstractmethod
    async def find_tags_for_post(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> List[Tag]:
        """Return the tags linked to a post, ordered by name."""
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[PostTagFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[PostTag]:
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[PostTagFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass
