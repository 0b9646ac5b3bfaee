"""Tenant context middleware.

Resolves the TenantContext once per request (tenant header, then bearer
token claim) and stores it on request.state. Invalid or conflicting tenant
input is rejected here, before any route runs.
"""

from __future__ import annotations

import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from tenantbase.core.config import get_settings
from tenantbase.core.constants import TENANT_CONTEXT_STATE_KEY
from tenantbase.core.exception_handlers import tenantbase_error_response
from tenantbase.core.tenant_context import resolve_tenant_context
from tenantbase.domain.exceptions import TenantbaseException

logger = logging.getLogger(__name__)


def TenantContextMiddleware(app: Callable) -> Callable:
    """Attach the request's TenantContext to request.state before the route runs."""

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            try:
                context = resolve_tenant_context(request.headers, get_settings())
            except TenantbaseException as e:
                logger.warning(
                    "Rejected tenant context on %s: %s", request.url.path, e.error_code
                )
                return tenantbase_error_response(e)
            setattr(request.state, TENANT_CONTEXT_STATE_KEY, context)
            if context.tenant_id:
                logger.debug(
                    "Tenant resolved: %s (source=%s)", context.tenant_id, context.source.value
                )
            return await call_next(request)

    return _Middleware(app)
