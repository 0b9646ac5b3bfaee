"""DTO for a resolved tenant connection (no dependency on ORM or Redis)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime

from tenantbase.shared.utils import ensure_utc, utc_now


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Resolved connection string for one tenant's database.

    Immutable once resolved. The cache stores it as JSON bytes; the TTL
    lives on the cache entry, not here.
    """

    tenant_id: str
    connection_string: str
    resolved_at: datetime = field(default_factory=utc_now)

    def __repr__(self) -> str:
        # Connection strings carry credentials; keep them out of logs and tracebacks.
        return (
            f"ConnectionDescriptor(tenant_id={self.tenant_id!r}, "
            f"resolved_at={self.resolved_at.isoformat()!r})"
        )

    def to_cache_bytes(self) -> bytes:
        """Serialize for the distributed cache."""
        return json.dumps(
            {
                "tenant_id": self.tenant_id,
                "connection_string": self.connection_string,
                "resolved_at": self.resolved_at.isoformat(),
            }
        ).encode("utf-8")

    @classmethod
    def from_cache_bytes(cls, raw: bytes) -> ConnectionDescriptor:
        """Deserialize a cache entry.

        Raises:
            ValueError: If the payload is not valid JSON or misses fields.
        """
        try:
            data = json.loads(raw)
            return cls(
                tenant_id=data["tenant_id"],
                connection_string=data["connection_string"],
                resolved_at=ensure_utc(datetime.fromisoformat(data["resolved_at"])),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed connection cache entry: {e!s}") from e
