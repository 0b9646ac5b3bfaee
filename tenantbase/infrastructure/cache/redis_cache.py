"""Redis-based distributed cache client.

Async Redis adapter over raw bytes with TTL support. Used by the tenant
connection resolver to memoize connection strings across processes.
Unlike a best-effort cache, every Redis failure is raised as
CacheUnavailableException so the caller decides how to degrade. Commands
run behind a circuit breaker: once Redis keeps failing, calls fail fast
without touching the socket until the reset window passes.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import redis.asyncio as redis
from aiobreaker import CircuitBreaker, CircuitBreakerError

from tenantbase.core.config import Settings, get_settings
from tenantbase.domain.exceptions import CacheUnavailableException

logger = logging.getLogger(__name__)


class RedisCacheClient:
    """Async Redis cache client with TTL support.

    Call connect() at startup and disconnect() at shutdown. No retries
    beyond what redis-py does by default. ping() bypasses the breaker so
    health checks always see the real state.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        """Initialize cache client.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
            breaker: Optional circuit breaker; built from the redis_breaker_*
                settings when omitted.
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        if breaker is None:
            breaker = CircuitBreaker(
                fail_max=self.settings.redis_breaker_fail_max,
                timeout_duration=timedelta(seconds=self.settings.redis_breaker_reset_seconds),
            )
        self.breaker = breaker
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Create the Redis client and ping once. Call on app startup.

        A failed ping is logged; the client is kept so later calls can
        reconnect through the pool once Redis comes back.
        """
        if self.redis is None:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                decode_responses=False,
                socket_connect_timeout=self.settings.redis_socket_timeout,
                socket_timeout=self.settings.redis_socket_timeout,
                socket_keepalive=True,
            )
        self._connected = await self.ping()
        if self._connected:
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        else:
            logger.warning(
                "Redis ping failed at %s:%s. Tenant lookups will fall back to the master database.",
                self.settings.redis_host,
                self.settings.redis_port,
            )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if the last connect/ping succeeded."""
        return self._connected and self.redis is not None

    def _client(self, operation: str, key: str) -> redis.Redis:
        if self.redis is None:
            raise CacheUnavailableException(operation, key, "client not connected")
        return self.redis

    async def ping(self) -> bool:
        """Return True if Redis answers PING. Never raises."""
        if self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except (redis.RedisError, OSError) as e:
            logger.debug("Redis ping failed: %s", e)
            return False

    async def _guarded(self, operation: str, key: str, func, *args):
        """Run one Redis command through the breaker, mapping failures."""
        try:
            result = await self.breaker.call_async(func, *args)
        except CircuitBreakerError as e:
            self._connected = False
            logger.debug("Redis circuit open, skipping %s for %s", operation, key)
            raise CacheUnavailableException(operation, key, "circuit open") from e
        except (redis.RedisError, OSError) as e:
            self._connected = False
            raise CacheUnavailableException(operation, key, str(e)) from e
        self._connected = True
        return result

    async def get(self, key: str) -> bytes | None:
        """Return cached bytes or None on miss.

        Args:
            key: Cache key (use tenantbase.infrastructure.cache.keys builders).

        Raises:
            CacheUnavailableException: On any Redis or socket error, or while
                the circuit breaker is open.
        """
        client = self._client("get", key)
        value = await self._guarded("get", key, client.get, key)
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store bytes with TTL.

        Args:
            key: Cache key.
            value: Serialized value.
            ttl: Time-to-live in seconds.

        Raises:
            CacheUnavailableException: On any Redis or socket error, or while
                the circuit breaker is open.
        """
        client = self._client("set", key)
        await self._guarded("set", key, client.setex, key, ttl, value)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str) -> None:
        """Remove key from cache.

        Raises:
            CacheUnavailableException: On any Redis or socket error, or while
                the circuit breaker is open.
        """
        client = self._client("delete", key)
        await self._guarded("delete", key, client.delete, key)
        logger.debug("Cache DELETE: %s", key)
