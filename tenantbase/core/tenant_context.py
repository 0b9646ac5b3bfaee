"""Request-scoped tenant context.

The tenant is resolved once per request from the tenant header or the
tenant claim of a bearer token, and carried as an immutable TenantContext
value (request.state -> FastAPI dependency -> consumer). There is no
ambient/global tenant: code outside a request simply has no context.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from tenantbase.core.config import Settings
from tenantbase.core.constants import BEARER_PREFIX
from tenantbase.domain.exceptions import (
    InvalidTenantIdException,
    TenantConflictException,
    TenantContextMissingException,
)
from tenantbase.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

# Alphanumeric, hyphen, underscore; also keeps ids free of the cache key separator.
TENANT_ID_MAX_LENGTH = 64
_TENANT_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(TENANT_ID_MAX_LENGTH) + r"}$"
)


def is_valid_tenant_id_format(value: str) -> bool:
    """Return True if value is an acceptable tenant identifier."""
    if not value or len(value) > TENANT_ID_MAX_LENGTH:
        return False
    return bool(_TENANT_ID_RE.fullmatch(value))


class TenantSource(str, Enum):
    """Where the tenant identifier came from."""

    HEADER = "header"
    TOKEN = "token"


@dataclass(frozen=True)
class TenantContext:
    """Immutable tenant context for one request."""

    tenant_id: str | None = None
    source: TenantSource | None = None
    header_name: str = "X-Tenant"

    def current_tenant_id(self) -> str | None:
        """Return the tenant identifier, or None for anonymous/system calls."""
        return self.tenant_id

    def require_tenant_id(self) -> str:
        """Return the tenant identifier or raise TenantContextMissingException."""
        if self.tenant_id is None:
            raise TenantContextMissingException(self.header_name)
        return self.tenant_id


def _tenant_claim(headers: Mapping[str, str], settings: Settings) -> str | None:
    """Return the tenant claim of a valid bearer token, else None."""
    auth = headers.get("authorization") or headers.get("Authorization")
    if not auth or not auth.startswith(BEARER_PREFIX):
        return None
    try:
        payload = verify_token(auth[len(BEARER_PREFIX):].strip(), settings)
    except ValueError as e:
        # Rejecting bad tokens is the auth layer's job; here they just carry no tenant.
        logger.debug("Ignoring bearer token for tenant resolution: %s", e)
        return None
    claim = payload.get(settings.tenant_claim_name)
    return str(claim) if claim else None


def resolve_tenant_context(headers: Mapping[str, str], settings: Settings) -> TenantContext:
    """Build the TenantContext for a request.

    Header wins as the source; when a token also carries a tenant claim the
    two must agree.

    Raises:
        InvalidTenantIdException: If header or claim fails format validation.
        TenantConflictException: If header and token claim disagree.
    """
    header_name = settings.tenant_header_name
    raw_header = headers.get(header_name) or headers.get(header_name.lower())
    header_tenant = (raw_header.strip() or None) if raw_header else None
    token_tenant = _tenant_claim(headers, settings)

    for value in (header_tenant, token_tenant):
        if value is not None and not is_valid_tenant_id_format(value):
            raise InvalidTenantIdException()

    if header_tenant and token_tenant and header_tenant != token_tenant:
        raise TenantConflictException(header_tenant, token_tenant)

    if header_tenant:
        return TenantContext(header_tenant, TenantSource.HEADER, header_name)
    if token_tenant:
        return TenantContext(token_tenant, TenantSource.TOKEN, header_name)
    return TenantContext(header_name=header_name)
