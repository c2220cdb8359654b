"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import Changes, DomainModel, Filter
from board.domain.value import CategoryId, PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    ``likes_count`` is a denormalized counter owned by the like service.
    Deleting the author cascades to the post; deleting the category is
    blocked while the post exists.
    """

    id: PostId
    title: str
    content: str
    user_id: UserId
    category_id: CategoryId
    likes_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class PostCreate(DomainModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    user_id: UserId
    category_id: CategoryId


class PostUpdate(Changes):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    category_id: Optional[CategoryId] = None


class PostFilter(Filter):
    user_id: Optional[UserId] = None
    category_id: Optional[CategoryId] = None
