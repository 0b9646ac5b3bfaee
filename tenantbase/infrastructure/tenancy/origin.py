"""Origin resolver: tenant code -> connection string from the master database.

One query per call, no caching, no retries and no concurrency control.
Lookups run behind a circuit breaker: after repeated failures the master
database is not queried again until the breaker's reset window passes.
Wrapped by StampedeProtectedConnectionResolver in
tenantbase.infrastructure.tenancy.cached.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import timedelta

from aiobreaker import CircuitBreaker, CircuitBreakerError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantbase.application.dtos.connection import ConnectionDescriptor
from tenantbase.application.dtos.tenant import TenantConnectionRecord
from tenantbase.application.interfaces.repositories import ITenantDirectory
from tenantbase.domain.exceptions import (
    OriginUnavailableException,
    TenantInactiveException,
    TenantNotFoundException,
)
from tenantbase.infrastructure.persistence.repositories import TenantDirectoryRepository

logger = logging.getLogger(__name__)


class MasterTenantConnectionResolver:
    """Resolve tenant connection strings straight from the master database.

    Raises TenantNotFoundException, TenantInactiveException or
    OriginUnavailableException (unreachable store, driver error, timeout,
    open circuit breaker).
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        timeout_seconds: float = 5.0,
        directory_factory: Callable[[AsyncSession], ITenantDirectory] = TenantDirectoryRepository,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._timeout_seconds = timeout_seconds
        self._directory_factory = directory_factory
        if breaker is None:
            breaker = CircuitBreaker(fail_max=5, timeout_duration=timedelta(seconds=30))
        self.breaker = breaker
        logger.info("MasterTenantConnectionResolver initialized (timeout: %ss)", timeout_seconds)

    async def _lookup(self, tenant_id: str) -> TenantConnectionRecord | None:
        async with self._session_factory() as session:
            directory = self._directory_factory(session)
            return await directory.get_connection_record(tenant_id)

    async def _timed_lookup(self, tenant_id: str) -> TenantConnectionRecord | None:
        return await asyncio.wait_for(self._lookup(tenant_id), timeout=self._timeout_seconds)

    async def get_connection_string(self, tenant_id: str) -> ConnectionDescriptor:
        """Query the master database for tenant_id's connection string."""
        logger.debug("Resolving tenant connection string for: %s", tenant_id)
        try:
            record = await self.breaker.call_async(self._timed_lookup, tenant_id)
        except CircuitBreakerError as e:
            logger.warning(
                "Master database circuit open, skipping lookup for tenant %s", tenant_id
            )
            raise OriginUnavailableException(tenant_id, "circuit open") from e
        except TimeoutError as e:
            logger.warning(
                "Master database lookup timed out after %ss for tenant %s",
                self._timeout_seconds,
                tenant_id,
            )
            raise OriginUnavailableException(
                tenant_id, f"timed out after {self._timeout_seconds}s"
            ) from e
        except (SQLAlchemyError, OSError) as e:
            logger.warning(
                "Master database unavailable for tenant %s: %s",
                tenant_id,
                type(e).__name__,
            )
            raise OriginUnavailableException(tenant_id, type(e).__name__) from e

        if record is None:
            logger.warning("Tenant not found: %s", tenant_id)
            raise TenantNotFoundException(tenant_id)
        if not record.is_active:
            logger.warning("Tenant inactive: %s (status=%s)", tenant_id, record.status.value)
            raise TenantInactiveException(tenant_id, record.status.value)

        logger.debug("Successfully resolved connection string for tenant: %s", tenant_id)
        return ConnectionDescriptor(
            tenant_id=tenant_id,
            connection_string=record.connection_string,
        )
