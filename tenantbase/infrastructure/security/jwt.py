"""JWT token creation and verification.

Tokens are issued by the identity provider; this service only reads the
tenant claim. create_access_token exists for local tooling and tests.
Uses tenantbase.core.config for secret and algorithm.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from tenantbase.core.config import Settings, get_settings

_DEFAULT_EXPIRY = timedelta(minutes=30)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (e.g. sub, tenant_id).
        expires_delta: Optional TTL; defaults to 30 minutes.
        settings: Optional settings; defaults to get_settings().

    Returns:
        Encoded JWT string.
    """
    settings = settings or get_settings()
    to_encode = data.copy()
    to_encode["exp"] = datetime.now(UTC) + (expires_delta or _DEFAULT_EXPIRY)
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub. Raises ValueError if the token is
    invalid, expired, missing required claims, or no secret is configured.

    Args:
        token: JWT string (e.g. from Authorization header).
        settings: Optional settings; defaults to get_settings().

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = settings or get_settings()
    secret = settings.secret_key.get_secret_value()
    if not secret:
        raise ValueError("Token verification is not configured (SECRET_KEY is empty)")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload
