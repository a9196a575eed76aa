"""
Error types for plistkeeper.

Store operations catch these locally and report failure as a boolean;
only ConfigurationError is meant to reach the caller.
"""


class SettingsError(Exception):
    """Base class for all settings persistence failures."""
    pass


class SettingsIOError(SettingsError):
    """Raised when a file system operation on a settings file fails."""
    pass


class EncodeError(SettingsError):
    """Raised when a settings value cannot be serialized."""
    pass


class DecodeError(SettingsError):
    """Raised when serialized bytes do not match the expected structure."""
    pass


class ConfigurationError(SettingsError):
    """Raised when the cache or bundle root cannot be determined."""
    pass
