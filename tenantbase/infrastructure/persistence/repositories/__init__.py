"""Persistence repositories. Re-exports for dependency injection."""

from tenantbase.infrastructure.persistence.repositories.tenant_repo import (
    TenantDirectoryRepository,
)

__all__ = ["TenantDirectoryRepository"]
