"""Health check API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from tenantbase.domain.enums import HealthStatus


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessEntry(BaseModel):
    """One dependency probe in the readiness report."""

    status: HealthStatus
    duration: float = Field(..., description="Probe duration in milliseconds")
    description: str


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready (200 when ready, 503 when a dependency is unhealthy)."""

    status: HealthStatus
    total_duration: float = Field(..., description="Total duration in milliseconds")
    entries: dict[str, ReadinessEntry]


class TenantHealthResponse(BaseModel):
    """Response for GET /health/tenants/{tenant_id}."""

    status: HealthStatus
    tenant: str
    message: str
    duration: float = Field(..., description="Probe duration in milliseconds")
    timestamp: datetime
