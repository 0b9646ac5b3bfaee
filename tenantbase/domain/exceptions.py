"""Domain exceptions for tenant connection resolution.

Defines the error taxonomy of the resolution path. These exceptions are
independent of HTTP; the presentation layer maps error_code to a status
in tenantbase.core.exception_handlers.
"""

from typing import Any


class TenantbaseException(Exception):
    """Base exception for all tenantbase application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. tenant_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class TenantNotFoundException(TenantbaseException):
    """Raised when the master store has no record for a tenant identifier."""

    def __init__(self, tenant_id: str) -> None:
        """Initialize with the missing tenant identifier.

        Args:
            tenant_id: The tenant identifier that was not found.
        """
        super().__init__(
            f"Tenant '{tenant_id}' does not exist.",
            "TENANT_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class TenantInactiveException(TenantbaseException):
    """Raised when the tenant record exists but is not active."""

    def __init__(self, tenant_id: str, status: str) -> None:
        super().__init__(
            f"Tenant '{tenant_id}' is inactive and cannot process requests.",
            "TENANT_INACTIVE",
            {"tenant_id": tenant_id, "status": status},
        )


class OriginUnavailableException(TenantbaseException):
    """Raised when the master store cannot be reached or the lookup timed out."""

    def __init__(self, tenant_id: str, reason: str) -> None:
        """Initialize with tenant and reason.

        Args:
            tenant_id: Tenant whose lookup failed.
            reason: Short description (e.g. 'timed out after 5.0s').
        """
        super().__init__(
            f"Tenant directory unavailable while resolving '{tenant_id}'",
            "ORIGIN_UNAVAILABLE",
            {"tenant_id": tenant_id, "reason": reason},
        )


class CacheUnavailableException(TenantbaseException):
    """Raised by the distributed cache client when Redis cannot serve a call."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            f"Cache {operation} failed for key {key}",
            "CACHE_UNAVAILABLE",
            {"operation": operation, "key": key, "reason": reason},
        )


class TenantContextMissingException(TenantbaseException):
    """Raised when a consumer needs a tenant but the request carries none."""

    def __init__(self, header_name: str) -> None:
        """Initialize with the header the client should have sent.

        Args:
            header_name: Name of the tenant header (e.g. 'X-Tenant').
        """
        super().__init__(
            f"{header_name} header is required but was not provided.",
            "TENANT_CONTEXT_MISSING",
            {"header": header_name},
        )


class TenantConflictException(TenantbaseException):
    """Raised when the tenant header and the token's tenant claim disagree."""

    def __init__(self, header_tenant: str, token_tenant: str) -> None:
        super().__init__(
            f"Tenant mismatch: header tenant '{header_tenant}' does not match token tenant '{token_tenant}'.",
            "TENANT_CONFLICT",
            {"header_tenant": header_tenant, "token_tenant": token_tenant},
        )


class InvalidTenantIdException(TenantbaseException):
    """Raised when a tenant identifier fails format validation."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid tenant ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
            "INVALID_TENANT_ID",
        )
