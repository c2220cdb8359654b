"""Base service class for domain services."""

from board.domain.error import UserInactive
from board.domain.model import User


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def ensure_can_write(user: User) -> None:
    """Reject writes on behalf of a suspended or deleted user.

    Raises:
        UserInactive: If the user is not active
    """
    if not user.is_active:
        raise UserInactive(user.id, user.status.value)
