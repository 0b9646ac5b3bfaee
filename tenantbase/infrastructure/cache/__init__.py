"""Cache: Redis client and cache key utilities.

Used by the tenant connection resolver. Key format is in keys.py (DRY).
"""

from tenantbase.infrastructure.cache.keys import tenant_connection_key
from tenantbase.infrastructure.cache.redis_cache import RedisCacheClient

__all__ = [
    "RedisCacheClient",
    "tenant_connection_key",
]
