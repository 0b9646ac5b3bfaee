"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from tenantbase.domain.enums import HealthStatus, TenantStatus
from tenantbase.domain.exceptions import (
    CacheUnavailableException,
    InvalidTenantIdException,
    OriginUnavailableException,
    TenantbaseException,
    TenantConflictException,
    TenantContextMissingException,
    TenantInactiveException,
    TenantNotFoundException,
)

__all__ = [
    # Enums
    "HealthStatus",
    "TenantStatus",
    # Exceptions
    "CacheUnavailableException",
    "InvalidTenantIdException",
    "OriginUnavailableException",
    "TenantbaseException",
    "TenantConflictException",
    "TenantContextMissingException",
    "TenantInactiveException",
    "TenantNotFoundException",
]
