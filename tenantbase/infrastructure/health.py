"""Health probes: master database, distributed cache, and per-tenant database.

Each probe returns a HealthCheckResult and does not raise; the caller
decides whether to answer 200 or 503. The tenant probe is a consumer of the
resolution chain: it resolves the tenant's descriptor, opens a connection
and runs SELECT 1.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession, async_sessionmaker

from tenantbase.application.dtos.connection import ConnectionDescriptor
from tenantbase.application.interfaces.services import (
    IDistributedCache,
    ITenantConnectionResolver,
)
from tenantbase.domain.enums import HealthStatus
from tenantbase.domain.exceptions import TenantbaseException
from tenantbase.infrastructure.persistence.tenant_database import tenant_connection

logger = logging.getLogger(__name__)

ConnectionOpener = Callable[[ConnectionDescriptor], AbstractAsyncContextManager[AsyncConnection]]

_PROBE_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class HealthCheckResult:
    """Outcome of one probe. duration is in milliseconds."""

    status: HealthStatus
    description: str
    duration: float


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


async def check_master_database(
    session_factory: async_sessionmaker[AsyncSession],
) -> HealthCheckResult:
    """SELECT 1 against the master database."""
    started = time.perf_counter()
    try:
        async with session_factory() as session:
            await asyncio.wait_for(
                session.execute(text("SELECT 1")), timeout=_PROBE_TIMEOUT_SECONDS
            )
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("Master database health check failed: %s", type(e).__name__)
        return HealthCheckResult(
            HealthStatus.UNHEALTHY,
            f"Master database is not accessible ({type(e).__name__})",
            _elapsed_ms(started),
        )
    return HealthCheckResult(
        HealthStatus.HEALTHY, "Master database is accessible", _elapsed_ms(started)
    )


async def check_cache(cache: IDistributedCache | None) -> HealthCheckResult:
    """Ping Redis. A down cache is DEGRADED: lookups still work through the origin."""
    started = time.perf_counter()
    if cache is None:
        return HealthCheckResult(
            HealthStatus.DEGRADED, "Cache disabled by configuration", _elapsed_ms(started)
        )
    if await cache.ping():
        return HealthCheckResult(
            HealthStatus.HEALTHY, "Cache is accessible", _elapsed_ms(started)
        )
    logger.warning("Cache health check failed; serving lookups from the master database")
    return HealthCheckResult(
        HealthStatus.DEGRADED,
        "Cache is not accessible; tenant lookups fall back to the master database",
        _elapsed_ms(started),
    )


class TenantDatabaseHealthCheck:
    """Verify connectivity to a specific tenant's database."""

    def __init__(
        self,
        resolver: ITenantConnectionResolver,
        connect: ConnectionOpener | None = None,
        timeout_seconds: float = _PROBE_TIMEOUT_SECONDS,
    ) -> None:
        self._resolver = resolver
        self._connect = connect or tenant_connection
        self._timeout_seconds = timeout_seconds

    async def _probe(self, tenant_id: str) -> None:
        descriptor = await self._resolver.get_connection_string(tenant_id)
        async with self._connect(descriptor) as conn:
            await conn.execute(text("SELECT 1"))

    async def check(self, tenant_id: str) -> HealthCheckResult:
        """Resolve the tenant, open a connection, run SELECT 1."""
        started = time.perf_counter()
        try:
            await asyncio.wait_for(self._probe(tenant_id), timeout=self._timeout_seconds)
        except TenantbaseException as e:
            logger.warning("Health check failed for tenant %s: %s", tenant_id, e.error_code)
            return HealthCheckResult(
                HealthStatus.UNHEALTHY,
                f"Tenant database '{tenant_id}' is not accessible: {e.message}",
                _elapsed_ms(started),
            )
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            logger.warning(
                "Health check failed for tenant %s: %s", tenant_id, type(e).__name__
            )
            return HealthCheckResult(
                HealthStatus.UNHEALTHY,
                f"Tenant database '{tenant_id}' is not accessible",
                _elapsed_ms(started),
            )
        logger.debug("Health check passed for tenant %s", tenant_id)
        return HealthCheckResult(
            HealthStatus.HEALTHY,
            f"Tenant database '{tenant_id}' is accessible",
            _elapsed_ms(started),
        )
