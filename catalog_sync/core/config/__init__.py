"""
Configuration module for the catalog sync pipeline
"""

from .settings import (
    Settings,
    ScraperSettings,
    SyncSettings,
    AuthSettings,
    LoggingSettings,
    load_settings,
)

__all__ = [
    "Settings",
    "ScraperSettings",
    "SyncSettings",
    "AuthSettings",
    "LoggingSettings",
    "load_settings",
]
