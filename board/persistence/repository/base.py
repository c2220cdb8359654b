"""Shared plumbing for the SQL repositories."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import (
    Any,
    AsyncGenerator,
    Callable,
    ClassVar,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from sqlalchemy import (
    ColumnElement,
    Table,
    case,
    delete,
    func,
    insert,
    literal,
    select,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.expression import Executable

from board.domain.error import InternalError
from board.domain.model.common import Filter
from board.persistence.database import transaction
from board.persistence.errors import translate_errors

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlRepository(Generic[T]):
    """Base class for repositories over a single table.

    Each repository is the only reader and writer of its table. Methods
    take an optional ambient ``session``; without one they open their own
    unit of work.
    """

    table: ClassVar[Table]
    to_model: ClassVar[Callable[[Mapping[str, Any]], Any]]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def _unit(
        self, session: Optional[AsyncSession] = None
    ) -> AsyncGenerator[AsyncSession, None]:
        with translate_errors(self.table.name):
            async with transaction(self.session_factory, session) as active:
                yield active

    def _map(self, row: Mapping[str, Any]) -> T:
        return self.to_model(row)

    def _where(self, filter: Optional[Filter]) -> List[ColumnElement[bool]]:
        """Turn a filter into AND-ed equality predicates."""
        if filter is None:
            return []
        return [self.table.c[name] == value for name, value in filter.predicates().items()]

    async def _fetch_one(
        self, stmt: Executable, session: Optional[AsyncSession] = None
    ) -> Optional[T]:
        async with self._unit(session) as s:
            result = await s.execute(stmt)
            row = result.mappings().first()
        return self._map(row) if row else None

    async def _fetch_all(
        self, stmt: Executable, session: Optional[AsyncSession] = None
    ) -> List[T]:
        async with self._unit(session) as s:
            result = await s.execute(stmt)
            rows = result.mappings().all()
        return [self._map(row) for row in rows]

    async def _exists(
        self,
        criteria: Sequence[ColumnElement[bool]],
        session: Optional[AsyncSession] = None,
    ) -> bool:
        stmt = select(literal(1)).select_from(self.table).where(*criteria).limit(1)
        async with self._unit(session) as s:
            result = await s.execute(stmt)
            return result.scalar() is not None

    async def _insert(self, values: dict[str, Any], session: AsyncSession) -> Any:
        """Insert a row stamped with creation time and return its primary key."""
        now = utcnow()
        values = {**values, "created_at": now, "updated_at": now}
        async with self._unit(session) as s:
            result = await s.execute(insert(self.table).values(**values))
            return result.inserted_primary_key[0]

    async def _update(
        self,
        criteria: Sequence[ColumnElement[bool]],
        values: dict[str, Any],
        session: AsyncSession,
    ) -> int:
        values = {**values, "updated_at": utcnow()}
        async with self._unit(session) as s:
            result = await s.execute(update(self.table).where(*criteria).values(**values))
            return result.rowcount  # type: ignore[attr-defined]

    async def _delete(
        self,
        criteria: Sequence[ColumnElement[bool]],
        session: Optional[AsyncSession] = None,
    ) -> int:
        async with self._unit(session) as s:
            result = await s.execute(delete(self.table).where(*criteria))
            return result.rowcount  # type: ignore[attr-defined]

    async def _list(
        self,
        filter: Optional[Filter],
        order_by: Sequence[Any],
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[T]:
        stmt = select(self.table).where(*self._where(filter)).order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return await self._fetch_all(stmt, session)

    async def _count(
        self, filter: Optional[Filter], session: Optional[AsyncSession] = None
    ) -> int:
        stmt = select(func.count()).select_from(self.table).where(*self._where(filter))
        async with self._unit(session) as s:
            result = await s.execute(stmt)
            return result.scalar_one()


class EntityRepository(SqlRepository[T]):
    """Repository for tables keyed by an integer ``id`` column."""

    async def _get(self, entity_id: int, session: Optional[AsyncSession] = None) -> Optional[T]:
        return await self._fetch_one(
            select(self.table).where(self.table.c.id == entity_id), session
        )

    async def _create(self, values: dict[str, Any], session: Optional[AsyncSession]) -> T:
        async with self._unit(session) as s:
            new_id = await self._insert(values, s)
            created = await self._get(new_id, s)
        if created is None:
            raise InternalError(f"Inserted row {new_id} vanished from {self.table.name}")
        return created

    async def _apply_changes(
        self,
        entity_id: int,
        values: dict[str, Any],
        session: Optional[AsyncSession],
    ) -> Optional[T]:
        """Write only the supplied fields, then re-read the row."""
        async with self._unit(session) as s:
            if values:
                updated = await self._update([self.table.c.id == entity_id], values, s)
                if not updated:
                    return None
            return await self._get(entity_id, s)

    async def _delete_by_id(
        self, entity_id: int, session: Optional[AsyncSession] = None
    ) -> bool:
        return await self._delete([self.table.c.id == entity_id], session) > 0

    async def _exists_unique(
        self,
        column: str,
        value: Any,
        exclude_id: Optional[int],
        session: Optional[AsyncSession],
    ) -> bool:
        criteria = [self.table.c[column] == value]
        if exclude_id is not None:
            criteria.append(self.table.c.id != exclude_id)
        return await self._exists(criteria, session)

    async def _adjust_likes(
        self, entity_id: int, delta: int, session: Optional[AsyncSession]
    ) -> bool:
        """Atomically shift ``likes_count`` by ``delta``, clamped at zero.

        Counter changes do not touch ``updated_at``.
        """
        column = self.table.c.likes_count
        shifted = column + delta
        new_value = shifted if delta >= 0 else case((shifted > 0, shifted), else_=0)
        stmt = (
            update(self.table)
            .where(self.table.c.id == entity_id)
            .values(likes_count=new_value)
        )
        async with self._unit(session) as s:
            result = await s.execute(stmt)
            return result.rowcount > 0  # type: ignore[attr-defined]
