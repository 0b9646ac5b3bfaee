"""Shared utilities: datetime, row ids."""

from tenantbase.shared.utils.datetime import ensure_utc, utc_now
from tenantbase.shared.utils.ids import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
