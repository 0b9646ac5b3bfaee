"""Persistence models: master-database ORM entities and mixins."""

from tenantbase.infrastructure.persistence.models.tenant import Tenant

__all__ = ["Tenant"]
