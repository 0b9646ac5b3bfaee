"""Tenant ORM model. Master-database directory of tenants and their databases."""

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tenantbase.domain.enums import TenantStatus
from tenantbase.infrastructure.persistence.database import Base
from tenantbase.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Tenant(CuidMixin, TimestampMixin, Base):
    """Tenant directory entry. Table: tenant. Status: active, suspended, archived.

    code is the tenant identifier sent by clients; connection_string points
    at the tenant's own database.
    """

    __tablename__ = "tenant"

    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    connection_string: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=TenantStatus.ACTIVE.value, index=True
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ({})".format(
                ", ".join(
                    "'{}'".format(v.replace("'", "''"))
                    for v in TenantStatus.values()
                )
            ),
            name="tenant_status_check",
        ),
    )
