"""Common utilities for edgegrid-auth."""

from edgegrid_auth.common.logging import configure_logging, get_logger
from edgegrid_auth.common.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
