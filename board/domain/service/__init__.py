"""Domain services."""

from board.domain.service.category_service import CategoryService
from board.domain.service.comment_service import CommentService
from board.domain.service.jwt_service import JWTService
from board.domain.service.like_service import LikeService
from board.domain.service.post_service import PostService
from board.domain.service.tag_service import TagService
from board.domain.service.user_service import UserService

__all__ = [
    "CategoryService",
    "CommentService",
    "JWTService",
    "LikeService",
    "PostService",
    "TagService",
    "UserService",
]
