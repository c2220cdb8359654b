"""SQL implementation of User repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model import User, UserCreate, UserFilter, UserUpdate
from board.domain.repository import UserRepository
from board.domain.value import UserId, UserStatus
from board.persistence.mappers import row_to_user
from board.persistence.repository.base import EntityRepository
from board.persistence.tables import users_table


class SqlUserRepository(EntityRepository[User], UserRepository):
    """SQL implementation of UserRepository."""

    table = users_table
    to_model = staticmethod(row_to_user)

    async def create(
        self, data: UserCreate, session: Optional[AsyncSession] = None
    ) -> User:
        """Insert a new user."""
        return await self._create(data.model_dump(mode="json"), session)

    async def find_by_id(
        self, user_id: UserId, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        """Find a user by ID."""
        return await self._get(user_id, session)

    async def find_by_email(
        self, email: str, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        """Find a user by email."""
        stmt = select(users_table).where(users_table.c.email == email)
        return await self._fetch_one(stmt, session)

    async def find_by_nickname(
        self, nickname: str, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        """Find a user by nickname."""
        stmt = select(users_table).where(users_table.c.nickname == nickname)
        return await self._fetch_one(stmt, session)

    async def exists_by_email(
        self,
        email: str,
        exclude_id: Optional[UserId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        return await self._exists_unique("email", email, exclude_id, session)

    async def exists_by_nickname(
        self,
        nickname: str,
        exclude_id: Optional[UserId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        return await self._exists_unique("nickname", nickname, exclude_id, session)

    async def update(
        self,
        user_id: UserId,
        changes: UserUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[User]:
        """Apply the supplied fields to a user."""
        return await self._apply_changes(user_id, changes.supplied(), session)

    async def soft_delete(
        self, user_id: UserId, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        """Mark a user as deleted."""
        return await self._apply_changes(
            user_id, {"status": UserStatus.DELETED.value}, session
        )

    async def delete(
        self, user_id: UserId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Hard-delete a user."""
        return await self._delete_by_id(user_id, session)

    async def list(
        self,
        filter: Optional[UserFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[User]:
        """List users, oldest account first."""
        return await self._list(
            filter, [users_table.c.id.asc()], limit, offset, session
        )

    async def count(
        self,
        filter: Optional[UserFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        return await self._count(filter, session)
