"""Like entity.

A like references its target polymorphically: ``target_id`` resolves against
posts or comments depending on ``target_type`` and carries no foreign key.
The like service checks the target exists before inserting.
"""

from datetime import datetime
from typing import Optional

from board.domain.model.common import DomainModel, Filter
from board.domain.value import LikeId, LikeTargetType, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per target (enforced by database unique constraint)
    - Removing a like is idempotent
    """

    id: LikeId
    user_id: UserId
    target_type: LikeTargetType
    target_id: int  # PostId or CommentId
    created_at: datetime
    updated_at: datetime


class LikeCreate(DomainModel):
    user_id: UserId
    target_type: LikeTargetType
    target_id: int


class LikeFilter(Filter):
    user_id: Optional[UserId] = None
    target_type: Optional[LikeTargetType] = None
    target_id: Optional[int] = None
