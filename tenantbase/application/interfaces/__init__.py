"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from tenantbase.infrastructure or tenantbase.api.
"""

from tenantbase.application.interfaces.repositories import ITenantDirectory
from tenantbase.application.interfaces.services import (
    IDistributedCache,
    ITenantConnectionResolver,
)

__all__ = [
    "IDistributedCache",
    "ITenantConnectionResolver",
    "ITenantDirectory",
]
