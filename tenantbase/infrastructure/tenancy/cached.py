"""Cached tenant connection resolver with cache-stampede protection.

Decorates any ITenantConnectionResolver (normally the master-database
resolver) with the distributed cache:

1. Cache hit: return the stored descriptor. No ticket, no origin call.
2. Cache miss: join the in-flight lookup for the tenant, or start one.
   At most one origin call per tenant runs in this process at a time.
3. The lookup writes the result to the cache, removes its ticket, then
   completes, so every waiter sees the same value or the same exception.

Cache failures degrade to a miss. Origin failures reach every waiter and
are never cached.

The in-flight map is only touched from the event loop thread and the
check-and-insert in get_connection_string has no await in between, so
registration is atomic without a lock.
"""

from __future__ import annotations

import asyncio
import functools
import logging

from tenantbase.application.dtos.connection import ConnectionDescriptor
from tenantbase.application.interfaces.services import (
    IDistributedCache,
    ITenantConnectionResolver,
)
from tenantbase.domain.exceptions import (
    CacheUnavailableException,
    InvalidTenantIdException,
    OriginUnavailableException,
)
from tenantbase.infrastructure.cache.keys import tenant_connection_key

logger = logging.getLogger(__name__)


class StampedeProtectedConnectionResolver:
    """Distributed-cache decorator around an origin resolver.

    Args:
        inner: Resolver consulted on a cache miss.
        cache: Distributed cache; None disables caching entirely.
        ttl: Cache entry time-to-live in seconds.
        namespace: Prefix for cache keys.
        wait_timeout: Optional seconds each caller waits on a lookup. On
            expiry that caller gets OriginUnavailableException; the shared
            lookup keeps running for the others.
    """

    def __init__(
        self,
        inner: ITenantConnectionResolver,
        cache: IDistributedCache | None,
        *,
        ttl: int,
        namespace: str,
        wait_timeout: float | None = None,
    ) -> None:
        self._inner = inner
        self._cache = cache
        self._ttl = ttl
        self._namespace = namespace
        self._wait_timeout = wait_timeout
        self._inflight: dict[str, asyncio.Task[ConnectionDescriptor]] = {}
        logger.info(
            "Tenant connection cache initialized (TTL: %ss, storage=%s)",
            ttl,
            "redis" if cache is not None else "none",
        )

    @property
    def pending_lookups(self) -> int:
        """Number of origin lookups currently in flight."""
        return len(self._inflight)

    def _key(self, tenant_id: str) -> str:
        try:
            return tenant_connection_key(self._namespace, tenant_id)
        except ValueError as e:
            raise InvalidTenantIdException() from e

    async def get_connection_string(self, tenant_id: str) -> ConnectionDescriptor:
        """Return the connection descriptor for tenant_id.

        Raises:
            TenantNotFoundException, TenantInactiveException,
            OriginUnavailableException: From the origin lookup.
            InvalidTenantIdException: If tenant_id cannot form a cache key.
        """
        key = self._key(tenant_id)
        cached = await self._read_cache(tenant_id, key)
        if cached is not None:
            return cached

        task = self._inflight.get(tenant_id)
        if task is None or task.done():
            task = asyncio.create_task(
                self._fetch(tenant_id, key), name=f"tenant-lookup:{tenant_id}"
            )
            task.add_done_callback(functools.partial(self._on_fetch_done, tenant_id))
            self._inflight[tenant_id] = task
            logger.debug("Tenant %s [cache=miss, fetching=origin]", tenant_id)
        else:
            logger.debug("Tenant %s [cache=miss, joining in-flight lookup]", tenant_id)

        return await self._wait_for(tenant_id, task)

    async def invalidate(self, tenant_id: str) -> None:
        """Drop the cached descriptor so the next lookup goes to the origin.

        Raises:
            CacheUnavailableException: If the cache cannot delete the key.
        """
        if self._cache is None:
            return
        await self._cache.delete(self._key(tenant_id))
        logger.info("Cache invalidated for tenant %s", tenant_id)

    async def _read_cache(self, tenant_id: str, key: str) -> ConnectionDescriptor | None:
        if self._cache is None:
            return None
        try:
            raw = await self._cache.get(key)
        except CacheUnavailableException as e:
            logger.warning(
                "Tenant %s [cache=unavailable, fallback=origin]: %s",
                tenant_id,
                e.details.get("reason"),
            )
            return None
        except Exception as e:
            logger.warning(
                "Tenant %s [cache=error, fallback=origin]: %s: %s",
                tenant_id,
                type(e).__name__,
                e,
            )
            return None
        if raw is None:
            return None
        try:
            descriptor = ConnectionDescriptor.from_cache_bytes(raw)
        except ValueError:
            logger.warning("Discarding malformed cache entry for tenant %s", tenant_id)
            return None
        if descriptor.tenant_id != tenant_id:
            logger.warning("Discarding cache entry for tenant %s: tenant mismatch", tenant_id)
            return None
        logger.debug("Tenant %s [cache=hit]", tenant_id)
        return descriptor

    async def _write_cache(self, tenant_id: str, key: str, descriptor: ConnectionDescriptor) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.set(key, descriptor.to_cache_bytes(), self._ttl)
        except CacheUnavailableException as e:
            logger.warning(
                "Could not cache connection string for tenant %s: %s",
                tenant_id,
                e.details.get("reason"),
            )
            return
        except Exception as e:
            logger.warning(
                "Could not cache connection string for tenant %s: %s: %s",
                tenant_id,
                type(e).__name__,
                e,
            )
            return
        logger.info(
            "Cached connection string for tenant %s [ttl=%ss, storage=redis]",
            tenant_id,
            self._ttl,
        )

    async def _fetch(self, tenant_id: str, key: str) -> ConnectionDescriptor:
        """Ticket body: origin call, cache write, ticket removal."""
        try:
            descriptor = await self._inner.get_connection_string(tenant_id)
            await self._write_cache(tenant_id, key, descriptor)
            return descriptor
        finally:
            self._release(tenant_id, asyncio.current_task())

    def _release(self, tenant_id: str, task: asyncio.Task | None) -> None:
        # A newer ticket may already own the slot; only remove our own.
        if task is not None and self._inflight.get(tenant_id) is task:
            del self._inflight[tenant_id]

    def _on_fetch_done(self, tenant_id: str, task: asyncio.Task[ConnectionDescriptor]) -> None:
        self._release(tenant_id, task)
        if task.cancelled():
            logger.warning("Origin lookup for tenant %s was cancelled", tenant_id)
            return
        # Retrieve the exception so a lookup whose waiters all left is still logged once.
        exc = task.exception()
        if exc is not None:
            logger.debug("Origin lookup for tenant %s failed: %s", tenant_id, exc)

    async def _wait_for(
        self, tenant_id: str, task: asyncio.Task[ConnectionDescriptor]
    ) -> ConnectionDescriptor:
        # shield: cancelling this caller must not cancel the shared lookup.
        waiter = asyncio.shield(task)
        if self._wait_timeout is None:
            return await waiter
        try:
            return await asyncio.wait_for(waiter, timeout=self._wait_timeout)
        except TimeoutError as e:
            logger.warning(
                "Gave up waiting %ss for tenant %s lookup; lookup continues",
                self._wait_timeout,
                tenant_id,
            )
            raise OriginUnavailableException(
                tenant_id, f"waited {self._wait_timeout}s for in-flight lookup"
            ) from e
