"""Database store with async SQLAlchemy.

Handles:
- Database session management
- Connection pooling
- Mapping driver failures to StoreUnavailableError

PostgreSQL (asyncpg) in production; any SQLAlchemy async URL works
(tests run on SQLite via aiosqlite).
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from message_api.settings import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


class StoreUnavailableError(RuntimeError):
    """The document store cannot be reached (or was never initialized)."""


# Engine and session factory (initialized on startup)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_db() -> None:
    """Initialize database connection pool."""
    global _engine, _session_factory

    settings = get_settings()
    pool_args: dict[str, object] = {}
    if not settings.is_sqlite:
        pool_args = {"pool_size": 5, "max_overflow": 10, "pool_pre_ping": True}

    _engine = create_async_engine(
        settings.async_database_url,
        echo=settings.database_echo,
        **pool_args,
    )
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def close_db() -> None:
    """Close database connection pool."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def ping_db() -> None:
    """Run a trivial query to validate connectivity."""
    async with get_session() as session:
        await session.execute(text("SELECT 1"))


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session context manager.

    Commits on success, rolls back on error.

    Usage:
        async with get_session() as session:
            result = await session.execute(query)
    """
    if _session_factory is None:
        raise StoreUnavailableError("Database not initialized. Call init_db() first.")

    try:
        async with _session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
    except (OperationalError, InterfaceError) as e:
        raise StoreUnavailableError(str(e.orig) if e.orig else str(e)) from e
    except OSError as e:
        # Driver-level transport failures (refused, reset, timed out) that SQLAlchemy does not wrap
        raise StoreUnavailableError(str(e) or type(e).__name__) from e


async def create_tables() -> None:
    """Create all tables (for development/testing only)."""
    if _engine is None:
        raise StoreUnavailableError("Database not initialized. Call init_db() first.")

    # Register models on Base.metadata
    import message_api.models  # noqa: F401

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

