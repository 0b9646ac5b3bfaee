"""Correlation ID middleware.

Forwards X-Correlation-ID for tracing across services, or generates one.
Client-provided values are sanitized (length + character set) to prevent
log injection. Uses raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

CORRELATION_ID_MAX_LENGTH = 64
_CORRELATION_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(CORRELATION_ID_MAX_LENGTH) + r"}$"
)


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _sanitize_correlation_id(raw: str | None) -> str:
    """Return raw if safe to log; otherwise a new UUID."""
    if raw and _CORRELATION_ID_RE.fullmatch(raw.strip()):
        return raw.strip()
    return str(uuid.uuid4())


def CorrelationIDMiddleware(
    app: Callable, header_name: str = "X-Correlation-ID"
) -> Callable:
    """Add or forward the correlation ID on each request and response. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        correlation_id = _sanitize_correlation_id(get_header(scope, header_name))
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
