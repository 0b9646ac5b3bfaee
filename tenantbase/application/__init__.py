"""Application layer: DTOs and interfaces.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (tenant directory, cache, resolvers).
"""

from tenantbase.application.dtos import ConnectionDescriptor, TenantConnectionRecord
from tenantbase.application.interfaces import (
    IDistributedCache,
    ITenantConnectionResolver,
    ITenantDirectory,
)

__all__ = [
    "ConnectionDescriptor",
    "IDistributedCache",
    "ITenantConnectionResolver",
    "ITenantDirectory",
    "TenantConnectionRecord",
]
