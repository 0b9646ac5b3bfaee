"""Tenant API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CurrentTenantResponse(BaseModel):
    """Response for GET /tenant: the caller's tenant and when its connection was resolved.

    The connection string itself is never returned.
    """

    tenant: str
    source: str = Field(..., description="Where the tenant came from: header or token")
    resolved_at: datetime
