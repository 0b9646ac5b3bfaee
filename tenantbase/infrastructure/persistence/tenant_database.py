"""Per-operation connections to tenant databases.

Consumers resolve a ConnectionDescriptor for the current tenant, then open a
connection with tenant_connection(). The engine uses NullPool and is disposed
on exit, so nothing outlives the operation: the resolver owns caching policy,
not the consumer.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine
from sqlalchemy.pool import NullPool

from tenantbase.application.dtos.connection import ConnectionDescriptor

_SYNC_POSTGRES_SCHEMES = ("postgresql://", "postgres://")
_ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg://"


def to_async_url(connection_string: str) -> str:
    """Return a SQLAlchemy async URL; plain postgres URLs get the asyncpg driver."""
    for scheme in _SYNC_POSTGRES_SCHEMES:
        if connection_string.startswith(scheme):
            return _ASYNC_POSTGRES_SCHEME + connection_string[len(scheme):]
    return connection_string


@asynccontextmanager
async def tenant_connection(
    descriptor: ConnectionDescriptor,
) -> AsyncIterator[AsyncConnection]:
    """Open a connection to the tenant database described by descriptor.

    Yields:
        An AsyncConnection; the engine is disposed when the block exits.
    """
    engine = create_async_engine(
        to_async_url(descriptor.connection_string),
        poolclass=NullPool,
    )
    try:
        async with engine.connect() as conn:
            yield conn
    finally:
        await engine.dispose()
