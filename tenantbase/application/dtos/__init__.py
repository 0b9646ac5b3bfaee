"""Application DTOs: plain dataclasses passed between layers."""

from tenantbase.application.dtos.connection import ConnectionDescriptor
from tenantbase.application.dtos.tenant import TenantConnectionRecord

__all__ = ["ConnectionDescriptor", "TenantConnectionRecord"]
