"""Current tenant endpoint: resolves the caller's tenant connection."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tenantbase.api.v1.dependencies import get_tenant_connection, get_tenant_context
from tenantbase.application.dtos.connection import ConnectionDescriptor
from tenantbase.core.tenant_context import TenantContext
from tenantbase.schemas.tenant import CurrentTenantResponse

router = APIRouter()


@router.get("", response_model=CurrentTenantResponse)
async def get_current_tenant(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    descriptor: Annotated[ConnectionDescriptor, Depends(get_tenant_connection)],
) -> CurrentTenantResponse:
    """Return the request's tenant once its connection string has resolved.

    400 without a tenant, 404 for an unknown tenant, 403 for an inactive one,
    503 when the master database is unavailable.
    """
    return CurrentTenantResponse(
        tenant=descriptor.tenant_id,
        source=context.source.value,
        resolved_at=descriptor.resolved_at,
    )
