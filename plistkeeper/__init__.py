"""
plistkeeper - file-backed settings persistence.

Keeps a dataclass settings value in a property list file, with a bundled
template and a first-run backup to reset from.
"""

__version__ = "0.9.0"

from .core import (
    SettingsStore,
    FileStore,
    PlistCodec,
    SettingsPaths,
    resolve_paths,
    SettingsError,
    SettingsIOError,
    EncodeError,
    DecodeError,
    ConfigurationError,
)

__all__ = [
    "SettingsStore",
    "FileStore",
    "PlistCodec",
    "SettingsPaths",
    "resolve_paths",
    "SettingsError",
    "SettingsIOError",
    "EncodeError",
    "DecodeError",
    "ConfigurationError",
]
