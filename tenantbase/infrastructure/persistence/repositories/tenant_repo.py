"""Tenant directory repository (master database). Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantbase.application.dtos.tenant import TenantConnectionRecord
from tenantbase.domain.enums import TenantStatus
from tenantbase.infrastructure.persistence.models.tenant import Tenant


class TenantDirectoryRepository:
    """Read-only access to the tenant table. No caching; callers own that policy."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_connection_record(self, code: str) -> TenantConnectionRecord | None:
        """Return code, connection string and status for tenant code, or None."""
        result = await self.db.execute(
            select(Tenant.code, Tenant.connection_string, Tenant.status).where(
                Tenant.code == code
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        return TenantConnectionRecord(
            code=row.code,
            connection_string=row.connection_string,
            status=TenantStatus(row.status),
        )

    async def list_active_codes(self) -> list[str]:
        """Return codes of active tenants, ordered for stable warm-up logs."""
        result = await self.db.execute(
            select(Tenant.code)
            .where(Tenant.status == TenantStatus.ACTIVE.value)
            .order_by(Tenant.code)
        )
        return list(result.scalars().all())
