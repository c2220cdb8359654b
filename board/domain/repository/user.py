"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model.user import User, UserCreate, UserFilter, UserUpdate
from board.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations. Every method
    accepts an optional ``session``: when given the call joins that unit of
    work, otherwise it runs in its own transaction.
    """

    @abstractmethod
    async def create(
        self, data: UserCreate, session: Optional[AsyncSession] = None
    ) -> User:
        """Insert a new user.

        Args:
            data: User fields, password already hashed
            session: Ambient unit of work

        Returns:
            The stored user

        Raises:
            UniqueViolation: If the email or nickname is taken
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, user_id: UserId, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_email(
        self, email: str, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_nickname(
        self, nickname: str, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_email(
        self,
        email: str,
        exclude_id: Optional[UserId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        """Check whether an email is registered.

        Args:
            email: Email to look for
            exclude_id: User to ignore (the one being updated)
            session: Ambient unit of work
        """
        pass

    @abstractmethod
    async def exists_by_nickname(
        self,
        nickname: str,
        exclude_id: Optional[UserId] = None,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        pass

    @abstractmethod
    async def update(
        self,
        user_id: UserId,
        changes: UserUpdate,
        session: Optional[AsyncSession] = None,
    ) -> Optional[User]:
        """Apply the supplied fields to a user.

        Returns:
            The updated user, or None if it does not exist
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, user_id: UserId, session: Optional[AsyncSession] = None
    ) -> Optional[User]:
        """Mark a user as deleted without removing the row."""
        pass

    @abstractmethod
    async def delete(
        self, user_id: UserId, session: Optional[AsyncSession] = None
    ) -> bool:
        """Hard-delete a user. Posts, comments and likes cascade."""
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[UserFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[User]:
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[UserFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass
