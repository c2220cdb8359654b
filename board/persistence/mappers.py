"""Mappers for converting database rows into domain models.

Since we're using Pydantic domain models (immutable) over Core tables, we
use manual mapping instead of SQLAlchemy's ORM mapping.
"""

from typing import Any, Mapping

from board.domain.model import Category, Comment, Like, Post, PostTag, Tag, User
from board.domain.value import (
    CategoryId,
    CommentId,
    LikeId,
    LikeTargetType,
    PostId,
    TagId,
    UserId,
    UserRole,
    UserStatus,
)

Row = Mapping[str, Any]


def row_to_user(row: Row) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row mapping

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        email=row["email"],
        password=row["password"],
        nickname=row["nickname"],
        profile_url=row["profile_url"],
        role=UserRole(row["role"]),
        status=UserStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_category(row: Row) -> Category:
    return Category(
        id=CategoryId(row["id"]),
        name=row["name"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_tag(row: Row) -> Tag:
    return Tag(
        id=TagId(row["id"]),
        name=row["name"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_post(row: Row) -> Post:
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        content=row["content"],
        user_id=UserId(row["user_id"]),
        category_id=CategoryId(row["category_id"]),
        likes_count=row["likes_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_post_tag(row: Row) -> PostTag:
    return PostTag(
        post_id=PostId(row["post_id"]),
        tag_id=TagId(row["tag_id"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment(row: Row) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row mapping

    Returns:
        Comment domain model
    """
    parent_id = row["parent_id"]
    return Comment(
        id=CommentId(row["id"]),
        content=row["content"],
        post_id=PostId(row["post_id"]),
        user_id=UserId(row["user_id"]),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        likes_count=row["likes_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_like(row: Row) -> Like:
    return Like(
        id=LikeId(row["id"]),
        user_id=UserId(row["user_id"]),
        target_type=LikeTargetType(row["target_type"]),
        target_id=row["target_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
