"""SQL implementations of Tag and PostTag repositories."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import PostTag, PostTagFilter, Tag, TagCreate, TagFilter, TagUpdate
from board.domain.repository import PostTagRepository, TagRepository
from board.domain.value import PostId, TagId
from board.persistence.mappers import row_to_post_tag, row_to_tag
from board.persistence.repository.base import EntityRepository, SqlRepository
from board.persistence.tables import post_tags_table, tags_table


class SqlTagRepository(EntityRepository[Tag], TagRepository):
    """SQL implementation of TagRepository."""

    table = tags_table
    to_model = staticmethod(row_to_tag)

    async def create(
        self, data: TagCreate, session: Optional[AsyncSession] = None
    ) -> Tag:
        return await self._create(data.model_dump(mode="json"), session)

    async def find_by_id(
        self, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> Optional[Tag]:
        return await self._get(tag_id, session)

    async def find_by_name(
        self, name: str, session: Optional[AsyncSession] = None
    ) -> Optional[Tag]:
        stmt = select(tags_table).where(tags_table.c.name == name)
        return await self._fetch_one(stmt, session)

    async def exists_by_name(
        self,
        name: str,
        exclude_id: Optional[TagId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        return await self._exists_unique("name", name, exclude_id, session)

    async def update(
        self,
        tag_id: TagId,
        changes: TagUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Tag]:
        return await self._apply_changes(tag_id, changes.supplied(), session)

    async def delete(
        self, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Delete a tag. Its post links cascade."""
        return await self._delete_by_id(tag_id, session)

    async def list(
        self,
        filter: Optional[TagFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Tag]:
        """List tags alphabetically."""
        return await self._list(filter, [tags_table.c.name.asc()], limit, offset, session)

    async def count(
        self,
        filter: Optional[TagFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        return await self._count(filter, session)


class SqlPostTagRepository(SqlRepository[PostTag], PostTagRepository):
    """SQL implementation of PostTagRepository."""

    table = post_tags_table
    to_model = staticmethod(row_to_post_tag)

    def _key(self, post_id: PostId, tag_id: TagId):
        return [post_tags_table.c.post_id == post_id, post_tags_table.c.tag_id == tag_id]

    async def create(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> PostTag:
        async with self._unit(session) as s:
            await self._insert({"post_id": post_id, "tag_id": tag_id}, s)
            link = await self.find(post_id, tag_id, s)
        # Freshly inserted in this unit of work
        return link  # type: ignore[return-value]

    async def find(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> Optional[PostTag]:
        stmt = select(post_tags_table).where(*self._key(post_id, tag_id))
        return await self._fetch_one(stmt, session)

    async def exists(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> bool:
        return await self._exists(self._key(post_id, tag_id), session)

    async def delete(
        self, post_id: PostId, tag_id: TagId, session: Optional[AsyncSession] = None
    ) -> bool:
        return await self._delete(self._key(post_id, tag_id), session) > 0

    async def find_tags_for_post(
        self, post_id: PostId, session: Optional[AsyncSession] = None
    ) -> List[Tag]:
        """Return the tags linked to a post, ordered by name."""
        stmt = (
            select(tags_table)
            .join(post_tags_table, post_tags_table.c.tag_id == tags_table.c.id)
            .where(post_tags_table.c.post_id == post_id)
            .order_by(tags_table.c.name.asc())
        )
        async with self._unit(session) as s:
            result = await s.execute(stmt)
            rows = result.mappings().all()
        return [row_to_tag(row) for row in rows]

    async def list(
        self,
        filter: Optional[PostTagFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[PostTag]:
        return await self._list(
            filter,
            [post_tags_table.c.post_id.asc(), post_tags_table.c.tag_id.asc()],
            limit,
            offset,
            session,
        )

    async def count(
        self,
        filter: Optional[PostTagFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        return await self._count(filter, session)
