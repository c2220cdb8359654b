"""User aggregate root.

Users register with email and password, author posts and comments, and like
content. Accounts are never hard-deleted by normal flows: ``status=deleted``
marks them as logically removed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import Changes, DomainModel, Filter
from board.domain.value import UserId, UserRole, UserStatus


class User(DomainModel):
    """User aggregate root.

    The password hash is excluded from ``model_dump()`` and ``repr`` so a
    serialized user is always safe to hand to the transport layer.
    """

    id: UserId
    email: str
    password: str = Field(repr=False, exclude=True)  # bcrypt hash
    nickname: str
    profile_url: Optional[str] = None
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_suspended(self) -> bool:
        return self.status == UserStatus.SUSPENDED

    @property
    def is_deleted(self) -> bool:
        return self.status == UserStatus.DELETED


class UserCreate(DomainModel):
    """Data for inserting a user. ``password`` must already be hashed."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(repr=False)
    nickname: str = Field(min_length=1, max_length=50)
    profile_url: Optional[str] = Field(default=None, max_length=500)
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE


class UserUpdate(Changes):
    nullable_fields = frozenset({"profile_url"})

    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    password: Optional[str] = Field(default=None, repr=False)
    nickname: Optional[str] = Field(default=None, min_length=1, max_length=50)
    profile_url: Optional[str] = Field(default=None, max_length=500)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None


class ProfileUpdate(Changes):
    """Fields a user may change on their own profile (plain-text password)."""

    nullable_fields = frozenset({"profile_url"})

    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    password: Optional[str] = Field(default=None, min_length=1, repr=False)
    nickname: Optional[str] = Field(default=None, min_length=1, max_length=50)
    profile_url: Optional[str] = Field(default=None, max_length=500)


class UserFilter(Filter):
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    email: Optional[str] = None
    nickname: Optional[str] = None
