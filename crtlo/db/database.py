"""
Database connection and session management for PostgreSQL.

Provides SQLAlchemy engine, session factory, and dependency injection
for FastAPI endpoints.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from crtlo.db.config import get_db_settings
from crtlo.utils.logger import logger


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# Lazy-loaded engine and session factory
_async_engine = None
_async_session_local = None


def get_async_engine():
    """Get or create the async database engine."""
    global _async_engine
    if _async_engine is None:
        settings = get_db_settings()
        _async_engine = create_async_engine(
            settings.get_async_url(),
            echo=settings.db_echo,
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    return _async_engine


def get_async_session_local():
    """Get or create the async session factory."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            bind=get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _async_session_local


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Commits when the request handler returns normally and rolls back when
    it raises.

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
        finally:
            await session.close()


async def close_db() -> None:
    """Dispose of the engine if one was created. Call on shutdown."""
    global _async_engine, _async_session_local
    if _async_engine is None:
        return
    logger.info("Closing database connections...")
    await _async_engine.dispose()
    _async_engine = None
    _async_session_local = None
    logger.info("Database connections closed")
