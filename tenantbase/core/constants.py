"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). The configurable
namespace (settings.cache_namespace) is prepended by the key builders.
"""

# Cache key prefixes (used with :connectionstring:<tenant_id>)
CACHE_PREFIX_TENANT = "tenant"
CACHE_SEGMENT_CONNECTION_STRING = "connectionstring"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Header/state names shared by middleware and dependencies
TENANT_CONTEXT_STATE_KEY = "tenant_context"
BEARER_PREFIX = "Bearer "
