"""Health check endpoints: liveness, readiness and per-tenant database probes."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantbase.api.v1.dependencies import (
    get_cache,
    get_connection_resolver,
    get_master_session_factory,
)
from tenantbase.application.interfaces.services import (
    IDistributedCache,
    ITenantConnectionResolver,
)
from tenantbase.core.tenant_context import is_valid_tenant_id_format
from tenantbase.domain.enums import HealthStatus
from tenantbase.domain.exceptions import InvalidTenantIdException
from tenantbase.infrastructure.health import (
    TenantDatabaseHealthCheck,
    check_cache,
    check_master_database,
)
from tenantbase.schemas.health import (
    HealthResponse,
    ReadinessEntry,
    ReadinessResponse,
    TenantHealthResponse,
)
from tenantbase.shared.utils import utc_now

router = APIRouter()


def _overall(statuses: list[HealthStatus]) -> HealthStatus:
    if HealthStatus.UNHEALTHY in statuses:
        return HealthStatus.UNHEALTHY
    if HealthStatus.DEGRADED in statuses:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Master database unreachable", "model": ReadinessResponse}},
)
async def readiness_check(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_master_session_factory)
    ],
    cache: Annotated[IDistributedCache | None, Depends(get_cache)],
) -> JSONResponse:
    """Probe the master database and the cache.

    A down cache only degrades the service (lookups fall back to the master
    database), so readiness fails (503) only when the master database does.
    """
    started = time.perf_counter()
    results = {
        "master_database": await check_master_database(session_factory),
        "cache": await check_cache(cache),
    }
    status = _overall([r.status for r in results.values()])
    body = ReadinessResponse(
        status=status,
        total_duration=(time.perf_counter() - started) * 1000,
        entries={
            name: ReadinessEntry(
                status=r.status, duration=r.duration, description=r.description
            )
            for name, r in results.items()
        },
    )
    return JSONResponse(
        status_code=503 if status == HealthStatus.UNHEALTHY else 200,
        content=body.model_dump(mode="json"),
    )


@router.get(
    "/tenants/{tenant_id}",
    response_model=TenantHealthResponse,
    responses={503: {"description": "Tenant database unreachable", "model": TenantHealthResponse}},
)
async def tenant_health_check(
    tenant_id: str,
    resolver: Annotated[ITenantConnectionResolver, Depends(get_connection_resolver)],
) -> JSONResponse:
    """Resolve the tenant's connection string and run SELECT 1 on its database."""
    if not is_valid_tenant_id_format(tenant_id):
        raise InvalidTenantIdException()
    result = await TenantDatabaseHealthCheck(resolver).check(tenant_id)
    body = TenantHealthResponse(
        status=result.status,
        tenant=tenant_id,
        message=result.description,
        duration=result.duration,
        timestamp=utc_now(),
    )
    return JSONResponse(
        status_code=200 if result.status == HealthStatus.HEALTHY else 503,
        content=body.model_dump(mode="json"),
    )
