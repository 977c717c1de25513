"""
Database module for the Promptly API.

Owns the async SQLAlchemy engine and session factory. The process entry
point calls init_database() on startup and close_database() on shutdown;
request handlers receive sessions through get_session().
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import get_settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_database() -> None:
    """
    Initialize the database engine and session factory.

    Should be called during application startup.
    """
    global _engine, _async_session_factory

    settings = get_settings()

    if not settings.is_database_configured:
        logger.warning("DATABASE_URL not configured or database disabled, skipping initialization")
        return

    logger.info("Initializing database connection...")

    _engine = create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug and settings.db_echo,
    )

    _async_session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    logger.info("Database initialized successfully")


async def close_database() -> None:
    """
    Dispose of the engine.

    Should be called during application shutdown.
    """
    global _engine, _async_session_factory

    if _engine is not None:
        logger.info("Closing database connection...")
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database connection closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session that commits on success and rolls back on error.

    Use as a dependency in FastAPI:
        @app.get("/items")
        async def get_items(session: AsyncSession = Depends(get_session)):
            ...
    """
    if _async_session_factory is None:
        raise RuntimeError(
            "Database not initialized. Call init_database() first or check DATABASE_URL."
        )

    async with _async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def is_database_available() -> bool:
    """Check if database is available and initialized."""
    return _engine is not None and _async_session_factory is not None


class DatabaseHealthCheck:
    """Database health check utility."""

    @staticmethod
    async def check() -> dict:
        """
        Check database health status.

        Returns:
            Dictionary with health status and latency
        """
        import time

        if _engine is None:
            return {
                "status": "not_initialized",
                "latency_ms": None,
            }

        try:
            start = time.perf_counter()
            async with _engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency_ms = (time.perf_counter() - start) * 1000
            return {
                "status": "healthy",
                "latency_ms": round(latency_ms, 2),
            }
        except (SQLAlchemyError, OSError) as e:
            return {
                "status": "unhealthy",
                "error": str(e),
                "latency_ms": None,
            }


__all__ = [
    "init_database",
    "close_database",
    "get_session",
    "is_database_available",
    "DatabaseHealthCheck",
]
