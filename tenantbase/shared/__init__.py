"""Shared utilities: logging setup and cross-cutting helpers.

Used by application, infrastructure and api layers. No business logic.
"""

from tenantbase.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
