"""
Default cache and bundle roots.

The cache root holds the writable settings and backup files, the bundle
root holds read-only templates shipped with the application.
"""

import logging
import os
import sys
from pathlib import Path

from .defaults import APP_NAME, BUNDLE_DIR_ENV, CACHE_DIR_ENV
from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def get_cache_root() -> Path:
    """
    Get the writable per-application cache directory.

    Uses $PLISTKEEPER_CACHE_DIR when set, otherwise the platform's generic
    cache location reported by Qt, with the application name appended:
        Linux: ~/.cache/plistkeeper
        macOS: ~/Library/Caches/plistkeeper
        Windows: %LOCALAPPDATA%\\cache\\plistkeeper

    The directory is not created here.

    Returns:
        Path to the cache root

    Raises:
        ConfigurationError: If no cache location is available
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override).expanduser()

    from PySide6.QtCore import QStandardPaths

    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.GenericCacheLocation
    )
    if not location:
        raise ConfigurationError(
            f"No writable cache location available; set {CACHE_DIR_ENV}"
        )

    return Path(location) / APP_NAME


def get_bundle_root() -> Path:
    """
    Get the read-only directory holding bundled settings templates.

    Uses $PLISTKEEPER_BUNDLE_DIR when set, otherwise the directory of the
    running program.

    Raises:
        ConfigurationError: If the program location cannot be determined
    """
    override = os.environ.get(BUNDLE_DIR_ENV)
    if override:
        return Path(override).expanduser()

    program = sys.argv[0] if sys.argv else ""
    if not program:
        raise ConfigurationError(
            f"Cannot determine the program directory; set {BUNDLE_DIR_ENV}"
        )

    return Path(program).resolve().parent
