"""Tag entity and the post/tag association."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import Changes, DomainModel, Filter
from board.domain.value import PostId, TagId


class Tag(DomainModel):
    id: TagId
    name: str
    created_at: datetime
    updated_at: datetime


class TagCreate(DomainModel):
    name: str = Field(min_length=1, max_length=50)


class TagUpdate(Changes):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)


class TagFilter(Filter):
    name: Optional[str] = None


class PostTag(DomainModel):
    """Pure many-to-many link between a post and a tag.

    Has no lifecycle of its own: it disappears with either side.
    """

    post_id: PostId
    tag_id: TagId
    created_at: datetime
    updated_at: datetime


class PostTagFilter(Filter):
    post_id: Optional[PostId] = None
    tag_id: Optional[TagId] = None
