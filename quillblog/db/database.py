"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from quillblog.configs import settings
from quillblog.monitoring.logging import get_logger

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000


def _configure_sqlite(engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy own SQLite transactions so SAVEPOINTs behave.

    Also switches on foreign key enforcement, which SQLite leaves off.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: Any, connection_record: object) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    PostgreSQL gets the pooled, statement-timeout configuration; SQLite
    (used for local runs and tests) gets transaction handling fixed up.

    Args:
        database_url: SQLAlchemy database URL
        echo: Echo SQL statements

    Returns:
        AsyncEngine: Configured engine
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        sqlite_engine = create_async_engine(database_url, echo=echo)
        _configure_sqlite(sqlite_engine)
        return sqlite_engine

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=settings.POOL_SIZE,
        max_overflow=settings.MAX_OVERFLOW,
        pool_timeout=settings.POOL_TIMEOUT,
        pool_recycle=settings.POOL_RECYCLE,
        pool_pre_ping=True,
        connect_args={
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        },
    )


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    """Create the session factory used for request-scoped sessions."""
    return async_sessionmaker(
        bind,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker = build_session_maker(engine)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on exception. Services that own
    their commit point call `session.commit()` themselves; the final commit
    here is then a no-op.

    Yields:
        AsyncSession: Database session within a transaction
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Create all tables defined in SQLModel models.

    For production, use the Alembic migrations instead.

    Args:
        bind: Engine to initialize (defaults to the application engine)
    """
    async with (bind or engine).begin() as conn:
        # Import all models to ensure they are registered
        from quillblog.models import BlogDB, CategoryDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database initialized successfully")


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
    logger.info("Database connections closed")
