"""
Configuration for plistkeeper.

This module holds defaults and the resolution of the cache and bundle roots.
"""

from .defaults import (
    APP_NAME,
    BACKUP_EXTENSION,
    BUNDLE_DIR_ENV,
    CACHE_DIR_ENV,
    DEFAULT_FORMAT,
    SETTINGS_EXTENSION,
)
from .roots import get_bundle_root, get_cache_root

__all__ = [
    "APP_NAME",
    "BACKUP_EXTENSION",
    "BUNDLE_DIR_ENV",
    "CACHE_DIR_ENV",
    "DEFAULT_FORMAT",
    "SETTINGS_EXTENSION",
    "get_bundle_root",
    "get_cache_root",
]
