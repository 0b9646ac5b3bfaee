"""Row identifiers for master-database tables (CUID2)."""

from cuid2 import Cuid

TENANT_ROW_ID_LENGTH = 24

_row_ids = Cuid(length=TENANT_ROW_ID_LENGTH)


def generate_cuid() -> str:
    """Return a new primary key for a tenant directory row."""
    return _row_ids.generate()
