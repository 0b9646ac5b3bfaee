"""Persistence: master-database async engine, session factory, and Base for SQLAlchemy ORM.

The master database holds the tenant table (tenant code -> connection
string). Tenant databases are opened per operation from the resolved
descriptor; see tenant_database.py.

Engine and session factory are created lazily on first use
(get_master_session_factory / get_master_db) so import does not trigger
Settings validation.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from tenantbase.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create master engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    pool_size = settings.db_pool_size if settings.db_pool_size is not None else 10
    max_overflow = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 20
    )
    command_timeout = (
        settings.db_command_timeout
        if settings.db_command_timeout is not None
        else 5
    )
    connect_args: dict[str, Any] = {}
    if "asyncpg" in settings.master_database_url:
        connect_args["command_timeout"] = command_timeout
    engine = create_async_engine(
        settings.master_database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=3600,
        connect_args=connect_args,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )
    logger.info("Master database engine created")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def get_master_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the master session factory, creating the engine if needed."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def get_master_db() -> AsyncIterator[AsyncSession]:
    """Master database session dependency for read operations.

    Does not commit. Yields a session and closes it on exit.
    """
    session_factory = get_master_session_factory()
    async with session_factory() as session:
        yield session


async def dispose_engine() -> None:
    """Dispose the master engine (app shutdown) and reset the lazy globals."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Master database engine disposed")
    engine = None
    AsyncSessionLocal = None
