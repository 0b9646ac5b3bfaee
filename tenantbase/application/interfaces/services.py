"""Service interfaces (ports) for the application layer.

Protocols define contracts for the resolution chain (DIP): the origin
resolver and the cached decorator both satisfy ITenantConnectionResolver,
so consumers never know which one they hold.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tenantbase.application.dtos.connection import ConnectionDescriptor


# Tenant connection resolver interface
class ITenantConnectionResolver(Protocol):
    """Protocol for resolving a tenant identifier to its connection descriptor."""

    async def get_connection_string(self, tenant_id: str) -> ConnectionDescriptor:
        """Return the descriptor or raise a TenantbaseException subclass."""


# Distributed cache interface
class IDistributedCache(Protocol):
    """Protocol for the shared byte cache. Failures raise CacheUnavailableException."""

    def is_available(self) -> bool:
        """Return True if the last connection attempt succeeded."""

    async def get(self, key: str) -> bytes | None:
        """Return cached bytes or None on miss."""

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store bytes with TTL in seconds."""

    async def delete(self, key: str) -> None:
        """Remove key from cache."""

    async def ping(self) -> bool:
        """Round-trip to the cache server; True when it answers."""
