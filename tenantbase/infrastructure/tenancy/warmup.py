"""Startup cache warm-up for tenant connection strings.

Lists active tenants from the master database and resolves each one through
the cached resolver, so the first request per tenant hits the cache instead
of queueing behind an origin lookup. Never blocks startup: every failure is
logged and counted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenantbase.application.interfaces.repositories import ITenantDirectory
from tenantbase.application.interfaces.services import ITenantConnectionResolver
from tenantbase.domain.exceptions import TenantbaseException
from tenantbase.infrastructure.persistence.repositories import TenantDirectoryRepository

logger = logging.getLogger(__name__)


async def _list_active_tenants(
    session_factory: async_sessionmaker[AsyncSession],
    directory_factory: Callable[[AsyncSession], ITenantDirectory],
) -> list[str]:
    async with session_factory() as session:
        return await directory_factory(session).list_active_codes()


async def warm_tenant_cache(
    resolver: ITenantConnectionResolver,
    session_factory: async_sessionmaker[AsyncSession],
    directory_factory: Callable[[AsyncSession], ITenantDirectory] = TenantDirectoryRepository,
    list_timeout_seconds: float = 5.0,
) -> tuple[int, int]:
    """Pre-resolve every active tenant sequentially (keeps master load flat).

    Args:
        resolver: The cached resolver (populates the cache as a side effect).
        session_factory: Master database session factory.
        directory_factory: Builds the tenant directory from a session.
        list_timeout_seconds: Upper bound for listing tenants.

    Returns:
        (warmed, failed) counts.
    """
    logger.info("Starting tenant connection cache warm-up")
    started = time.perf_counter()
    try:
        tenant_codes = await asyncio.wait_for(
            _list_active_tenants(session_factory, directory_factory),
            timeout=list_timeout_seconds,
        )
    except (SQLAlchemyError, OSError, TimeoutError):
        logger.exception(
            "Cache warm-up skipped: cannot list tenants from the master database. "
            "First requests per tenant will resolve from the origin."
        )
        return 0, 0

    if not tenant_codes:
        logger.warning("No active tenants found in the master database; nothing to warm")
        return 0, 0

    logger.info("Found %d active tenant(s) to warm", len(tenant_codes))
    warmed = 0
    failed = 0
    for code in tenant_codes:
        try:
            await resolver.get_connection_string(code)
        except TenantbaseException as e:
            failed += 1
            logger.warning(
                "Failed to warm cache for tenant %s (%s); first request may be slow",
                code,
                e.error_code,
            )
            continue
        warmed += 1
        logger.debug("Pre-warmed cache for tenant %s (%d/%d)", code, warmed, len(tenant_codes))

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Cache warm-up completed in %.0fms: %d succeeded, %d failed",
        elapsed_ms,
        warmed,
        failed,
    )
    return warmed, failed
