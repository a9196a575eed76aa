"""
Utility functions for plistkeeper.
"""

from .logger import setup_logging, get_log_dir
from .validators import settings_name_for, validate_settings_name, validate_settings_value

__all__ = [
    "setup_logging",
    "get_log_dir",
    "settings_name_for",
    "validate_settings_name",
    "validate_settings_value",
]
