"""Core: config, constants, tenant context and application bootstrap.

Single place for settings and shared constants.
"""

from tenantbase.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
