"""
Configuration package for the GoNext travel journal.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    StorageBackend,
    PhotoBackend,
    DatabaseSettings,
    PhotoSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "StorageBackend",
    "PhotoBackend",
    "DatabaseSettings",
    "PhotoSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
