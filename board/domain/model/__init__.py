"""Domain model entities for the community board."""

from board.domain.model.category import (
    Category,
    CategoryCreate,
    CategoryFilter,
    CategoryUpdate,
)
from board.domain.model.comment import (
    Comment,
    CommentCreate,
    CommentFilter,
    CommentUpdate,
)
from board.domain.model.like import Like, LikeCreate, LikeFilter
from board.domain.model.post import Post, PostCreate, PostFilter, PostUpdate
from board.domain.model.tag import (
    PostTag,
    PostTagFilter,
    Tag,
    TagCreate,
    TagFilter,
    TagUpdate,
)
from board.domain.model.user import (
    ProfileUpdate,
    User,
    UserCreate,
    UserFilter,
    UserUpdate,
)

__all__ = [
    "User",
    "UserCreate",
    "UserUpdate",
    "UserFilter",
    "ProfileUpdate",
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryFilter",
    "Post",
    "PostCreate",
    "PostUpdate",
    "PostFilter",
    "Comment",
    "CommentCreate",
    "CommentUpdate",
    "CommentFilter",
    "Tag",
    "TagCreate",
    "TagUpdate",
    "TagFilter",
    "PostTag",
    "PostTagFilter",
    "Like",
    "LikeCreate",
    "LikeFilter",
]
