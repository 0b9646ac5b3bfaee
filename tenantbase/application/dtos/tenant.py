"""DTOs for tenant directory lookups (no dependency on ORM)."""

from dataclasses import dataclass

from tenantbase.domain.enums import TenantStatus


@dataclass(frozen=True)
class TenantConnectionRecord:
    """Master-database row projection used by the origin resolver."""

    code: str
    connection_string: str
    status: TenantStatus

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE
