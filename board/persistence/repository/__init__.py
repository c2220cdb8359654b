"""SQL repository implementations."""

from board.persistence.repository.category import SqlCategoryRepository
from board.persistence.repository.comment import SqlCommentRepository
from board.persistence.repository.like import SqlLikeRepository
from board.persistence.repository.post import SqlPostRepository
from board.persistence.repository.tag import SqlPostTagRepository, SqlTagRepository
from board.persistence.repository.user import SqlUserRepository

__all__ = [
    "SqlUserRepository",
    "SqlCategoryRepository",
    "SqlPostRepository",
    "SqlCommentRepository",
    "SqlTagRepository",
    "SqlPostTagRepository",
    "SqlLikeRepository",
]
