"""Domain service providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.config import AuthSettings
from board.domain.repository import (
    CategoryRepository,
    CommentRepository,
    LikeRepository,
    PostRepository,
    PostTagRepository,
    TagRepository,
    UserRepository,
)
from board.domain.service import (
    CategoryService,
    CommentService,
    JWTService,
    LikeService,
    PostService,
    TagService,
    UserService,
)
from board.util.di.base import ProviderBase
from board.util.password import PasswordHasher


class DomainProvider(ProviderBase):
    """Domain service provider."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_user_service(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        user_repository: UserRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        password_hasher: PasswordHasher,
    ) -> UserService:
        """Provide user service."""
        return UserService(
            session_factory,
            user_repository,
            post_repository,
            comment_repository,
            like_repository,
            password_hasher,
        )

    @provide(scope=Scope.APP)
    def get_tag_service(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        tag_repository: TagRepository,
    ) -> TagService:
        """Provide tag service."""
        return TagService(session_factory, tag_repository)

    @provide(scope=Scope.APP)
    def get_category_service(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        category_repository: CategoryRepository,
        post_repository: PostRepository,
    ) -> CategoryService:
        """Provide category service."""
        return CategoryService(session_factory, category_repository, post_repository)

    @provide(scope=Scope.APP)
    def get_post_service(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        post_repository: PostRepository,
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        tag_repository: TagRepository,
        post_tag_repository: PostTagRepository,
        tag_service: TagService,
    ) -> PostService:
        """Provide post service."""
        return PostService(
            session_factory,
            post_repository,
            user_repository,
            category_repository,
            comment_repository,
            like_repository,
            tag_repository,
            post_tag_repository,
            tag_service,
        )

    @provide(scope=Scope.APP)
    def get_comment_service(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        like_repository: LikeRepository,
    ) -> CommentService:
        """Provide comment service."""
        return CommentService(
            session_factory,
            comment_repository,
            post_repository,
            user_repository,
            like_repository,
        )

    @provide(scope=Scope.APP)
    def get_like_service(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        like_repository: LikeRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> LikeService:
        """Provide like service."""
        return LikeService(
            session_factory,
            like_repository,
            post_repository,
            comment_repository,
            user_repository,
        )

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT service."""
        return JWTService(auth_settings)
