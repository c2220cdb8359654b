"""Comment entity.

Comments nest one level deep: a reply points at a top-level comment of the
same post, and a reply can never be a parent itself. The nesting cap is
enforced by the comment service, not by the schema.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import Changes, DomainModel, Filter
from board.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    id: CommentId
    content: str
    post_id: PostId
    user_id: UserId
    parent_id: Optional[CommentId] = None
    likes_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


class CommentCreate(DomainModel):
    content: str = Field(min_length=1)
    post_id: PostId
    user_id: UserId
    parent_id: Optional[CommentId] = None


class CommentUpdate(Changes):
    content: Optional[str] = Field(default=None, min_length=1)


class CommentFilter(Filter):
    """``top_level=True`` selects comments without a parent, ``False`` only replies."""

    flags = frozenset({"top_level"})

    post_id: Optional[PostId] = None
    user_id: Optional[UserId] = None
    parent_id: Optional[CommentId] = None
    top_level: Optional[bool] = None
