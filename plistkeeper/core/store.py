"""
File-backed settings store.

Loads, saves, deletes and resets a dataclass settings value kept in a
single property-list file, with a bundled template and a first-run backup
as recovery sources.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Generic, Optional, TextIO, TypeVar

from ..utils.validators import settings_name_for, validate_settings_name, validate_settings_value
from .codec import PlistCodec
from .errors import SettingsError
from .file_store import FileStore
from .paths import SettingsPaths, resolve_paths

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SettingsStore(Generic[T]):
    """
    Persistence for one settings value.

    The in-memory value lives in ``settings``. Files:
        current:  <cache-root>/<Name>.plist
        template: <bundle-root>/<Name>.plist  (never modified)
        backup:   <cache-root>/<Name>.plist.init

    Public operations never raise for I/O or codec failures. They return
    False (or None) and keep the error in ``last_error``.

    Not thread-safe. Give each settings identity a single owner and
    serialize calls to it.
    """

    def __init__(
        self,
        settings: T,
        name: Optional[str] = None,
        file_store: Optional[FileStore] = None,
        codec: Optional[PlistCodec] = None,
    ):
        """
        Initialize the store.

        Args:
            settings: Dataclass instance holding the default values
            name: Identity override, defaults to the class name
            file_store: File access, defaults to the configured roots
            codec: Property list codec, defaults to binary format

        Raises:
            TypeError: If settings is not a dataclass instance
            ValueError: If the identity is not a valid file name
            ConfigurationError: If default roots cannot be determined
        """
        self.settings: T = validate_settings_value(settings)
        self.name = validate_settings_name(name or settings_name_for(settings))
        self.file_store = file_store if file_store is not None else FileStore.default()
        self.codec = codec if codec is not None else PlistCodec()
        self.paths: SettingsPaths = resolve_paths(
            self.name, self.file_store.cache_root, self.file_store.bundle_root
        )
        self.last_error: Optional[SettingsError] = None

    def settings_path(self) -> Path:
        """Return the path of the current settings file."""
        return self.paths.current

    def load(self) -> bool:
        """
        Load settings from the current file.

        If the file does not exist yet, it is written from the in-memory
        value and a backup copy is kept for later resets.

        Returns:
            True if the file was decoded, or created on first run
        """
        self.last_error = None

        if self.file_store.exists(self.paths.current):
            return self._read_current()

        if not self.update():
            return False

        self._backup_settings_file()
        logger.info(f"Created {self.name} settings at {self.paths.current}")
        return True

    def load_using_settings_file(self) -> bool:
        """
        Load settings seeded from the bundled template.

        The template is copied to the cache root unless a current file
        already exists, then the current file is decoded. No backup is
        kept since the template remains available.

        Returns:
            True if a template exists and copying and decoding succeed
        """
        self.last_error = None

        if not self.file_store.exists(self.paths.template):
            logger.debug(f"No bundled template for {self.name} at {self.paths.template}")
            return False

        if not self.file_store.exists(self.paths.current):
            try:
                self.file_store.copy(self.paths.template, self.paths.current)
            except SettingsError as e:
                return self._fail("copy template", e)

        return self._read_current()

    def update(self) -> bool:
        """
        Encode the in-memory value and write it to the current file.

        Returns:
            True on success
        """
        self.last_error = None

        try:
            data = self.codec.encode(self.settings)
            self.file_store.write(self.paths.current, data)
        except SettingsError as e:
            return self._fail("save", e)

        logger.debug(f"Saved {self.name} settings to {self.paths.current}")
        return True

    def delete(self) -> bool:
        """
        Delete the current settings file.

        The backup and template are left alone.

        Returns:
            True on success, False if the file is missing or cannot be removed
        """
        self.last_error = None

        try:
            self.file_store.delete(self.paths.current)
        except SettingsError as e:
            return self._fail("delete", e)

        return True

    def reset(self) -> bool:
        """
        Reset settings to their original values.

        The current file is deleted, then the bundled template is loaded.
        Without a usable template, the first-run backup is restored and
        loaded instead. A template that was copied but cannot be decoded
        is removed again first, so the backup can take its place.

        Returns:
            True if either source could be loaded
        """
        if not self.delete():
            return False

        if self.load_using_settings_file():
            logger.info(f"Reset {self.name} settings from bundled template")
            return True

        # A template copied but not decodable would block the restore
        if self.file_store.exists(self.paths.current):
            self._discard_current()

        if not self._restore_settings_file():
            logger.warning(f"Reset of {self.name} settings failed, no template or backup")
            return False

        logger.info(f"Reset {self.name} settings from backup")
        return self.load()

    def to_dictionary(self) -> Optional[Dict[str, Any]]:
        """
        Read the current file as a plain dictionary.

        Parses the property list directly, without the typed decode.

        Returns:
            Dictionary of stored keys, or None if the file is missing or invalid
        """
        self.last_error = None

        if not self.file_store.exists(self.paths.current):
            return None

        try:
            return self.codec.parse(self.file_store.read(self.paths.current))
        except SettingsError as e:
            self._fail("read as dictionary", e)
            return None

    def describe_settings(self, stream: Optional[TextIO] = None):
        """
        Print every field name and value of the in-memory settings.

        Args:
            stream: Output stream, defaults to stdout
        """
        stream = stream if stream is not None else sys.stdout

        try:
            pairs = self.codec.fields_of(self.settings)
        except SettingsError as e:
            logger.warning(f"Cannot describe {self.name} settings: {e}")
            return

        lines = []
        for name, value in pairs:
            try:
                shown = repr(value)
            except Exception:
                # Broken __repr__ on a user type
                shown = f"<{type(value).__name__}>"
            lines.append(f'Setting: "{name}", Value: {shown}')

        print("\n".join(lines), file=stream)

    def _backup_settings_file(self) -> bool:
        """
        Copy the current file to the backup file.

        An existing backup is never overwritten, so the backup keeps the
        values from the first run.
        """
        try:
            self.file_store.copy(self.paths.current, self.paths.backup)
        except SettingsError as e:
            logger.warning(f"Could not back up {self.name} settings: {e}")
            return False
        return True

    def _restore_settings_file(self) -> bool:
        """Copy the backup file to the current file."""
        try:
            self.file_store.copy(self.paths.backup, self.paths.current)
        except SettingsError as e:
            return self._fail("restore backup", e)
        return True

    def _discard_current(self):
        try:
            self.file_store.delete(self.paths.current)
        except SettingsError as e:
            logger.warning(f"Could not remove unusable {self.name} settings: {e}")

    def _read_current(self) -> bool:
        try:
            data = self.file_store.read(self.paths.current)
            value = self.codec.decode(data, type(self.settings))
        except SettingsError as e:
            return self._fail("load", e)

        self.settings = value
        logger.debug(f"Loaded {self.name} settings from {self.paths.current}")
        return True

    def _fail(self, action: str, error: SettingsError) -> bool:
        logger.error(f"Failed to {action} {self.name} settings: {error}")
        self.last_error = error
        return False
