"""Household API Database Configuration - Async SQLAlchemy."""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from household.core.config import Settings
from household.core.logging import get_logger

logger = get_logger("database")

# Base class for models
Base = declarative_base()


def engine_options(settings: Settings) -> dict[str, Any]:
    """Build create_async_engine keyword arguments for the configured backend."""
    options: dict[str, Any] = {
        # Only echo SQL when debug is explicitly enabled
        "echo": settings.debug and settings.log_level == "DEBUG",
    }
    if settings.database_url.startswith("sqlite"):
        # SQLite pools do not accept sizing arguments
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,  # Verify connection before use
    )
    return options


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ignores ON DELETE actions unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Storage context owned by the application.

    Holds the engine and session factory shared by the request path and
    the background blacklist sweeper. One instance is created per app and
    published on ``app.state.database``.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, **engine_options(settings))

    async def create_all(self) -> None:
        """Create all tables (development and tests; deployments use Alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def check_connection(self) -> bool:
        """Check if database is reachable."""
        try:
            async with self.session_maker() as session:
                await session.execute(text("SELECT 1"))
                return True
        except (OSError, ConnectionError) as e:
            # Expected network/connection errors
            logger.debug(f"Database connection check failed: {e}")
            return False
        except Exception as e:
            logger.warning(f"Unexpected error checking database connection: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency returning the app-owned storage context."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    database = get_database(request)
    async with database.session_maker() as session:
        try:
            yield session
            await session.commit()
        except (Exception, BaseException):
            # Catch both regular exceptions and BaseExceptions (e.g., asyncio.CancelledError)
            # to ensure rollback happens even on cancellation
            await session.rollback()
            raise
