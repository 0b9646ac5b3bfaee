"""Cache key builders. Single place for key format (DRY).

Key components (tenant_id) must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys. The namespace is prepended verbatim so that
several services can share one Redis database.
"""

from tenantbase.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_TENANT,
    CACHE_SEGMENT_CONNECTION_STRING,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def tenant_connection_key(namespace: str, tenant_id: str) -> str:
    """Cache key for a tenant's connection string.

    Format: "<namespace>tenant:connectionstring:<tenant_id>".
    """
    _validate_key_component(tenant_id, "tenant_id")
    return (
        f"{namespace}{CACHE_PREFIX_TENANT}{CACHE_KEY_SEP}"
        f"{CACHE_SEGMENT_CONNECTION_STRING}{CACHE_KEY_SEP}{tenant_id}"
    )
