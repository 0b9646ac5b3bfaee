"""Security: JWT verification for reading tenant claims."""

from tenantbase.infrastructure.security.jwt import create_access_token, verify_token

__all__ = [
    "create_access_token",
    "verify_token",
]
