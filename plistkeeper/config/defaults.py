"""
Default values for plistkeeper.

File naming, environment variable names and the default on-disk format.
"""

APP_NAME = "plistkeeper"

# <Name>.plist in both roots, <Name>.plist.init for the backup
SETTINGS_EXTENSION = ".plist"
BACKUP_EXTENSION = ".init"

# Root overrides
CACHE_DIR_ENV = "PLISTKEEPER_CACHE_DIR"
BUNDLE_DIR_ENV = "PLISTKEEPER_BUNDLE_DIR"

# "binary" or "xml"
DEFAULT_FORMAT = "binary"

# Logs live next to the settings files
LOG_DIR_NAME = "logs"
