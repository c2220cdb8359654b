"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from board.domain.model.like import Like, LikeCreate, LikeFilter
from board.domain.value import LikeId, LikeTargetType, UserId


class LikeRepository(ABC):
    """Repository for Like entity.

    Defines the contract for like persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def create(
        self, data: LikeCreate, session: Optional[AsyncSession] = None
    ) -> Like:
        """Insert a like.

        This raises if the user already likes the target (unique constraint
        violation). The target itself is not checked.

        Args:
            data: Like fields
            session: Ambient unit of work

        Returns:
            The stored like

        Raises:
            UniqueViolation: If the like already exists
            ForeignKeyViolation: If the user does not exist
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, like_id: LikeId, session: Optional[AsyncSession] = None
    ) -> Optional[Like]:
        pass

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: int,
        session: Optional[AsyncSession] = None,
    ) -> Optional[Like]:
        """Find a user's like on a specific item.

        Args:
            user_id: The user's ID
            target_type: Type of item (post or comment)
            target_id: ID of the item
            session: Ambient unit of work

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(
        self, like_id: LikeId, session: Optional[AsyncSession] = None
    ) -> bool:
        pass

    @abstractmethod
    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: int,
        session: Optional[AsyncSession] = None,
    ) -> bool:
        """Delete a like by user and target.

        Returns:
            True if a like was deleted, False if no like existed
        """
        pass

    @abstractmethod
    async def delete_by_targets(
        self,
        target_type: LikeTargetType,
        target_ids: Sequence[int],
        session: Optional[AsyncSession] = None,
    ) -> int:
        """Delete every like on the given targets.

        Returns:
            Number of likes removed
        """
        pass

    @abstractmethod
    async def list(
        self,
        filter: Optional[LikeFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None,
    ) -> List[Like]:
        pass

    @abstractmethod
    async def count(
        self,
        filter: Optional[LikeFilter] = None,
        session: Optional[AsyncSession] = None,
    ) -> int:
        pass
