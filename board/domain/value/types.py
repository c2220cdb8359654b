"""Enumerated domain values."""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user account."""

    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Lifecycle status of a user account.

    active <-> suspended, active/suspended -> deleted. Deleted is terminal.
    """

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"

    def can_transition_to(self, target: "UserStatus") -> bool:
        """Check whether moving from this status to ``target`` is allowed."""
        if self is UserStatus.DELETED:
            return False
        return target is not self


class LikeTargetType(str, Enum):
    """Type of entity that can be liked."""

    POST = "post"
    COMMENT = "comment"
