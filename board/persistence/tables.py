"""SQLAlchemy table definitions for the community board.

These table definitions are used by the repositories to build Core
statements. They match the schema created by the migrations under
``board/persistence/migrations/versions``.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)

# Metadata object for all tables
metadata = MetaData()


def _timestamps() -> list[Column]:
    return [
        Column(
            "created_at",
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
        Column(
            "updated_at",
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
    ]


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False),
    Column("password", String(255), nullable=False),  # bcrypt hash
    Column("nickname", String(50), nullable=False),
    Column("profile_url", String(500), nullable=True),
    Column("role", String(20), nullable=False, server_default="user"),
    Column("status", String(20), nullable=False, server_default="active"),
    *_timestamps(),
    UniqueConstraint("email", name="uq_users_email"),
    UniqueConstraint("nickname", name="uq_users_nickname"),
)

Index("idx_users_status", users_table.c.status)

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("description", Text, nullable=True),
    *_timestamps(),
    UniqueConstraint("name", name="uq_categories_name"),
)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(50), nullable=False),
    *_timestamps(),
    UniqueConstraint("name", name="uq_tags_name"),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    *_timestamps(),
)

Index("idx_posts_user_id", posts_table.c.user_id)
Index("idx_posts_category_id", posts_table.c.category_id)
Index("idx_posts_created_at", posts_table.c.created_at)

# ============================================================================
# POST_TAGS TABLE (association)
# ============================================================================
post_tags_table = Table(
    "post_tags",
    metadata,
    Column(
        "post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    ),
    *_timestamps(),
    PrimaryKeyConstraint("post_id", "tag_id", name="pk_post_tags"),
)

Index("idx_post_tags_tag_id", post_tags_table.c.tag_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("content", Text, nullable=False),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    # Self-reference; one level deep is enforced by the comment service
    Column(
        "parent_id",
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    *_timestamps(),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_user_id", comments_table.c.user_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# LIKES TABLE (polymorphic target, no foreign key on target_id)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("target_type", String(20), nullable=False),  # 'post' or 'comment'
    Column("target_id", Integer, nullable=False),
    *_timestamps(),
    UniqueConstraint(
        "user_id", "target_type", "target_id", name="uq_likes_user_target"
    ),
)

Index("idx_likes_target", likes_table.c.target_type, likes_table.c.target_id)
