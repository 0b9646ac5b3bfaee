"""HTTP middleware: correlation ID and tenant context.

Applied in main app; order matters (first added = innermost).
Import and use from tenantbase.main.
"""

from tenantbase.middleware.correlation_id import CorrelationIDMiddleware
from tenantbase.middleware.tenant_context import TenantContextMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "TenantContextMiddleware",
]
