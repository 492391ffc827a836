"""
Database connection and session management.

Provides the SQLAlchemy declarative base, lazily created engines and session
factories, and the FastAPI session dependency.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from src.db.config import get_db_settings
from src.utils.logger import logger


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


_async_engine = None
_async_session_local = None


def get_async_engine():
    """Get or create the async database engine."""
    global _async_engine
    if _async_engine is None:
        settings = get_db_settings()
        engine_kwargs = {"echo": settings.echo, "pool_pre_ping": True}
        if not settings.is_sqlite:
            engine_kwargs["pool_size"] = settings.pool_size
            engine_kwargs["max_overflow"] = settings.max_overflow
        _async_engine = create_async_engine(settings.get_async_url(), **engine_kwargs)
    return _async_engine


def get_async_session_local() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            bind=get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _async_session_local


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Commits when the request handler returns normally and rolls back when it
    raises. Services may also commit earlier at their own saga boundaries.

    Yields:
        AsyncSession: Database session for use in endpoints
    """
    session_local = get_async_session_local()
    async with session_local() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def close_db() -> None:
    """Dispose of the async engine. Call on application shutdown."""
    global _async_engine, _async_session_local
    if _async_engine is None:
        return
    logger.info("Closing database connections...")
    await _async_engine.dispose()
    _async_engine = None
    _async_session_local = None
    logger.info("Database connections closed")
