"""Pydantic request/response schemas for the API."""

from tenantbase.schemas.health import (
    HealthResponse,
    ReadinessEntry,
    ReadinessResponse,
    TenantHealthResponse,
)
from tenantbase.schemas.tenant import CurrentTenantResponse

__all__ = [
    "CurrentTenantResponse",
    "HealthResponse",
    "ReadinessEntry",
    "ReadinessResponse",
    "TenantHealthResponse",
]
