"""Persistence providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from board.config import AuthSettings, SeedSettings, Settings
from board.domain.repository import (
    CategoryRepository,
    CommentRepository,
    LikeRepository,
    PostRepository,
    PostTagRepository,
    TagRepository,
    UserRepository,
)
from board.persistence.database import create_engine, create_session_factory
from board.persistence.repository import (
    SqlCategoryRepository,
    SqlCommentRepository,
    SqlLikeRepository,
    SqlPostRepository,
    SqlPostTagRepository,
    SqlTagRepository,
    SqlUserRepository,
)
from board.persistence.schema import SchemaManager
from board.persistence.seed import SeedLoader
from board.util.di.base import ProviderBase
from board.util.observability import instrument_sqlalchemy
from board.util.password import PasswordHasher


class PersistenceProvider(ProviderBase):
    """Persistence provider.

    Repositories are application-wide singletons sharing one session
    factory; each call opens or joins a unit of work.
    """

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_password_hasher(self, auth_settings: AuthSettings) -> PasswordHasher:
        return PasswordHasher(auth_settings)

    @provide(scope=Scope.APP)
    def get_user_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> UserRepository:
        """Provide user repository."""
        return SqlUserRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_category_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> CategoryRepository:
        """Provide category repository."""
        return SqlCategoryRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_post_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> PostRepository:
        """Provide post repository."""
        return SqlPostRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_comment_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> CommentRepository:
        """Provide comment repository."""
        return SqlCommentRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_tag_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> TagRepository:
        """Provide tag repository."""
        return SqlTagRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_post_tag_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> PostTagRepository:
        """Provide post/tag link repository."""
        return SqlPostTagRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_like_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> LikeRepository:
        """Provide like repository."""
        return SqlLikeRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_schema_manager(self, engine: AsyncEngine) -> SchemaManager:
        return SchemaManager(engine)

    @provide(scope=Scope.APP)
    def get_seed_loader(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
        password_hasher: PasswordHasher,
        seed_settings: SeedSettings,
    ) -> SeedLoader:
        return SeedLoader(
            session_factory,
            user_repository,
            category_repository,
            tag_repository,
            password_hasher,
            seed_settings,
        )
