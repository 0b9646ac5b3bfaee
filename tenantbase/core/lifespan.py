"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (master database,
Redis cache, tenant resolution chain, warm-up).
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator

from aiobreaker import CircuitBreaker
from fastapi import FastAPI

from tenantbase.core.config import get_settings
from tenantbase.infrastructure.cache import RedisCacheClient
from tenantbase.infrastructure.persistence.database import (
    dispose_engine,
    get_master_session_factory,
)
from tenantbase.infrastructure.tenancy import (
    MasterTenantConnectionResolver,
    StampedeProtectedConnectionResolver,
    warm_tenant_cache,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: master session factory, Redis cache (if enabled),
    resolver chain, cache warm-up (if enabled). Shutdown order: cache
    disconnect, master engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    session_factory = get_master_session_factory()
    app.state.master_session_factory = session_factory

    if settings.redis_enabled:
        cache = RedisCacheClient(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.warning("Redis disabled: every tenant lookup goes to the master database")

    origin = MasterTenantConnectionResolver(
        session_factory,
        timeout_seconds=settings.origin_timeout_seconds,
        breaker=CircuitBreaker(
            fail_max=settings.origin_breaker_fail_max,
            timeout_duration=timedelta(seconds=settings.origin_breaker_reset_seconds),
        ),
    )
    app.state.tenant_connections = StampedeProtectedConnectionResolver(
        origin,
        app.state.cache,
        ttl=settings.tenant_connection_cache_ttl,
        namespace=settings.cache_namespace,
        wait_timeout=settings.tenant_resolution_wait_timeout_seconds,
    )

    if settings.cache_warmup_enabled:
        await warm_tenant_cache(
            app.state.tenant_connections,
            session_factory,
            list_timeout_seconds=settings.origin_timeout_seconds,
        )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    await dispose_engine()
