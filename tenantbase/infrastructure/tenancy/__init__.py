"""Tenancy: tenant connection resolution chain (origin -> cached decorator) and warm-up."""

from tenantbase.infrastructure.tenancy.cached import StampedeProtectedConnectionResolver
from tenantbase.infrastructure.tenancy.origin import MasterTenantConnectionResolver
from tenantbase.infrastructure.tenancy.warmup import warm_tenant_cache

__all__ = [
    "MasterTenantConnectionResolver",
    "StampedeProtectedConnectionResolver",
    "warm_tenant_cache",
]
