"""Domain value objects for the community board."""

from board.domain.value.identifiers import (
    CategoryId,
    CommentId,
    LikeId,
    PostId,
    TagId,
    UserId,
)
from board.domain.value.types import LikeTargetType, UserRole, UserStatus

__all__ = [
    # Identifiers
    "UserId",
    "CategoryId",
    "PostId",
    "CommentId",
    "TagId",
    "LikeId",
    # Types
    "UserRole",
    "UserStatus",
    "LikeTargetType",
]
