"""
Core settings persistence for plistkeeper.

This module provides:
- A property list codec for dataclass settings
- File access under the cache and bundle roots
- Path resolution for current, template and backup files
- The SettingsStore with load/update/delete/reset
"""

from .errors import (
    SettingsError,
    SettingsIOError,
    EncodeError,
    DecodeError,
    ConfigurationError,
)
from .codec import PlistCodec
from .file_store import FileStore
from .paths import SettingsPaths, resolve_paths
from .store import SettingsStore

__all__ = [
    "SettingsError",
    "SettingsIOError",
    "EncodeError",
    "DecodeError",
    "ConfigurationError",
    "PlistCodec",
    "FileStore",
    "SettingsPaths",
    "resolve_paths",
    "SettingsStore",
]
