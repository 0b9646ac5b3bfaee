"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the request's tenant context and the
tenant connection resolution chain built in the lifespan. Routes depend
only on these dependencies, not on app.state directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantbase.application.dtos.connection import ConnectionDescriptor
from tenantbase.application.interfaces.services import (
    IDistributedCache,
    ITenantConnectionResolver,
)
from tenantbase.core.config import get_settings
from tenantbase.core.constants import TENANT_CONTEXT_STATE_KEY
from tenantbase.core.tenant_context import TenantContext, resolve_tenant_context


def get_tenant_context(request: Request) -> TenantContext:
    """Tenant context set by TenantContextMiddleware (resolved here if absent)."""
    context = getattr(request.state, TENANT_CONTEXT_STATE_KEY, None)
    if context is None:
        context = resolve_tenant_context(request.headers, get_settings())
        setattr(request.state, TENANT_CONTEXT_STATE_KEY, context)
    return context


def get_connection_resolver(request: Request) -> ITenantConnectionResolver:
    """Cached tenant connection resolver (origin behind stampede protection)."""
    return request.app.state.tenant_connections


def get_cache(request: Request) -> IDistributedCache | None:
    """Distributed cache client; None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_master_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Master database session factory built in the lifespan."""
    return request.app.state.master_session_factory


async def get_tenant_connection(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    resolver: Annotated[ITenantConnectionResolver, Depends(get_connection_resolver)],
) -> ConnectionDescriptor:
    """Connection descriptor for the current request's tenant.

    Raises TenantContextMissingException when the request carries no tenant;
    resolution errors (not found, inactive, origin unavailable) propagate to
    the exception handlers.
    """
    return await resolver.get_connection_string(context.require_tenant_id())
