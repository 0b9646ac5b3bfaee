"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from tenantbase.api.v1.dependencies (no direct app.state access).
"""

from fastapi import APIRouter

from tenantbase.api.v1.endpoints import health, tenant

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tenant.router, prefix="/tenant", tags=["tenant"])
