"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tenantbase.application.dtos.tenant import TenantConnectionRecord


# Tenant directory (master database) interface
class ITenantDirectory(Protocol):
    """Protocol for reading tenant connection records from the master store."""

    async def get_connection_record(self, code: str) -> TenantConnectionRecord | None:
        """Return the record for tenant code, or None if no row exists."""

    async def list_active_codes(self) -> list[str]:
        """Return codes of all active tenants (used by cache warm-up)."""
