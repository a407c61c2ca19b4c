"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pickme.config import Settings
from pickme.persistence.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


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


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables.

    Development convenience; production schemas are managed out of band.

    Args:
        engine: Database engine
    """
    with logfire.span("database.create_tables"):
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logfire.info("Database tables ensured", tables=sorted(metadata.tables))
