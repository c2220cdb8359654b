"""Tag domain service."""

from typing import List, Optional

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import DuplicateTagName, TagNotFound, UniqueViolation
from board.domain.model import Tag, TagCreate
from board.domain.repository import TagRepository
from board.domain.value import TagId
from board.persistence.database import transaction

from .base import Service


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        tag_repository: TagRepository,
    ) -> None:
        """Initialize tag service.

        Args:
            session_factory: Factory for units of work
            tag_repository: Tag repository
        """
        self.session_factory = session_factory
        self.tag_repository = tag_repository

    async def create_tag(self, name: str) -> Tag:
        """Create a tag.

        Raises:
            DuplicateTagName: If a tag with this name exists
        """
        with logfire.span("tag_service.create_tag", name=name):
            async with transaction(self.session_factory) as session:
                if await self.tag_repository.exists_by_name(name, session=session):
                    raise DuplicateTagName(name)
                try:
                    tag = await self.tag_repository.create(TagCreate(name=name), session)
                except UniqueViolation as e:
                    raise DuplicateTagName(name) from e
            logfire.info("Tag created", tag_id=tag.id, name=name)
            return tag

    async def find_or_create(
        self, name: str, session: Optional[AsyncSession] = None
    ) -> Tag:
        """Return the tag called ``name``, creating it if needed.

        The insert runs in a savepoint: if a concurrent caller creates the
        same tag first, the savepoint is rolled back and the winner's row is
        returned, leaving the surrounding transaction usable.
        """
        async with transaction(self.session_factory, session) as s:
            tag = await self.tag_repository.find_by_name(name, s)
            if tag is not None:
                return tag
            try:
                async with s.begin_nested():
                    tag = await self.tag_repository.create(TagCreate(name=name), s)
                logfire.info("Tag created", tag_id=tag.id, name=name)
                return tag
            except UniqueViolation:
                logfire.info("Tag created concurrently", name=name)
                existing = await self.tag_repository.find_by_name(name, s)
                if existing is None:
                    raise
                return existing

    async def get_by_name(self, name: str) -> Tag:
        tag = await self.tag_repository.find_by_name(name)
        if tag is None:
            raise TagNotFound(name)
        return tag

    async def list_tags(self) -> List[Tag]:
        """List all tags alphabetically."""
        with logfire.span("tag_service.list_tags"):
            return await self.tag_repository.list()

    async def delete_tag(self, tag_id: TagId) -> None:
        """Delete a tag and its post links.

        Raises:
            TagNotFound: If tag not found
        """
        with logfire.span("tag_service.delete_tag", tag_id=tag_id):
            if not await self.tag_repository.delete(tag_id):
                raise TagNotFound(tag_id)
            logfire.info("Tag deleted", tag_id=tag_id)
