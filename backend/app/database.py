"""
ContactBook Backend — Database Engine & Session Factory
=========================================================

What:  Builds the async SQLAlchemy engine and session factory from Settings.
Why:   Centralizes all connection logic in one place; the engine is the
       process-wide connection pool shared by every request.
How:   create_engine() and create_session_factory() are called once by the
       composition root (app.main.create_app); nothing connects at import time.
Who:   Used by create_app(), ContactRepository, Alembic, and the test fixtures.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite (tests) gets none of the pool arguments — aiosqlite picks its own
    pool class and rejects QueuePool sizing options.
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by Alembic for migrations and by
    init_schema() for implicit table creation.
    """
    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine (connection pool) for the configured database."""
    kwargs = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the AsyncSession factory bound to `engine`.

    expire_on_commit=False: Documents are rendered after commit; without this,
    touching an attribute would trigger a lazy reload outside the session.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_schema(engine: AsyncEngine) -> None:
    """
    Create any missing tables registered on Base.metadata.

    When:  Startup, if settings.db_auto_create_schema is enabled; test fixtures.
    Note:  Idempotent — existing tables are left untouched (no migrations).
    """
    # Import models so they register with Base.metadata before create_all
    from app.models import contact  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
