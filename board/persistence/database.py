"""Database connection, session and unit-of-work management.

Provides the async engine and session factory. PostgreSQL (asyncpg) is the
production backend; SQLite (aiosqlite) is supported for local runs and tests.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from board.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL and pool sizing

    Returns:
        Configured async engine
    """
    url = make_url(settings.database_url)
    options: dict[str, Any] = {
        "echo": settings.database.echo or settings.debug,
        "pool_pre_ping": True,  # Verify connections before using
    }
    # In-memory SQLite runs on a static pool that takes no sizing arguments
    if not (url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")):
        options["pool_size"] = settings.database.pool_size
        options["max_overflow"] = settings.database.max_overflow

    engine = create_async_engine(url, **options)
    if url.get_backend_name() == "sqlite":
        _configure_sqlite(engine)
    return engine


def _configure_sqlite(engine: AsyncEngine) -> None:
    """Enforce foreign keys and hand transaction control to SQLAlchemy.

    The driver's own implicit BEGIN handling is disabled so that DDL runs
    inside the surrounding transaction and SAVEPOINTs work.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
    session: Optional[AsyncSession] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Run a block inside a unit of work.

    Joins ``session`` when one is given and leaves commit/rollback to its
    owner. Otherwise opens a new session and transaction that commits on
    success and rolls back on any exception or cancellation.

    Args:
        session_factory: Factory for creating sessions
        session: Ambient session to join

    Yields:
        Database session
    """
    if session is not None:
        yield session
        return

    async with session_factory.begin() as new_session:
        yield new_session
