"""Repository interfaces (ports) for the domain layer."""

from board.domain.repository.category import CategoryRepository
from board.domain.repository.comment import CommentRepository
from board.domain.repository.like import LikeRepository
from board.domain.repository.post import PostRepository
from board.domain.repository.tag import PostTagRepository, TagRepository
from board.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "PostRepository",
    "CommentRepository",
    "TagRepository",
    "PostTagRepository",
    "LikeRepository",
]
