"""
Validation utilities for plistkeeper.
"""

import dataclasses
from typing import Any


def validate_settings_name(name: str) -> str:
    """
    Check that a settings identity can be used as a file name.

    Args:
        name: Identity, usually the settings class name

    Returns:
        The name unchanged

    Raises:
        ValueError: If the name is empty, a dot entry, or contains a
            path separator or NUL byte
    """
    if not isinstance(name, str) or not name:
        raise ValueError("Settings name must be a non-empty string")

    if name in (".", ".."):
        raise ValueError(f"Invalid settings name: {name!r}")

    if any(ch in name for ch in ("/", "\\", "\0")):
        raise ValueError(f"Settings name must not contain path separators: {name!r}")

    return name


def validate_settings_value(value: Any) -> Any:
    """
    Check that a settings value is a dataclass instance.

    Raises:
        TypeError: If the value is a class or not a dataclass at all
    """
    if isinstance(value, type) or not dataclasses.is_dataclass(value):
        raise TypeError(
            f"Settings value must be a dataclass instance, got {type(value).__name__}"
        )
    return value


def settings_name_for(value: Any) -> str:
    """
    Derive the identity of a settings value or class.

    A ``__settings_name__`` class attribute takes precedence over the
    class name.
    """
    cls = value if isinstance(value, type) else type(value)
    return getattr(cls, "__settings_name__", None) or cls.__name__
