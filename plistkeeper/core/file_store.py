"""
File system access for settings files.

Two roots are involved: a writable cache root for the current and backup
files, and a read-only bundle root holding shipped templates.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Union

from ..config.roots import get_bundle_root, get_cache_root
from .errors import SettingsIOError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileStore:
    """
    Blocking file operations under a cache root and a bundle root.

    Every failure is raised as SettingsIOError. Anything that would modify
    a file under the bundle root is refused.
    """

    def __init__(self, cache_root: PathLike, bundle_root: PathLike):
        self.cache_root = Path(cache_root)
        self.bundle_root = Path(bundle_root)

    @classmethod
    def default(cls) -> "FileStore":
        """
        Build a store from the configured default roots.

        Raises:
            ConfigurationError: If a root cannot be determined
        """
        return cls(get_cache_root(), get_bundle_root())

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read(self, path: PathLike) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise SettingsIOError(f"Failed to read {path}: {e}") from e

    def write(self, path: PathLike, data: bytes):
        """
        Write bytes to a file, replacing it atomically.

        Parent directories are created as needed.
        """
        path = Path(path)
        self._ensure_writable(path)
        tmp = path.with_name(path.name + ".tmp")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as e:
            self._discard(tmp)
            raise SettingsIOError(f"Failed to write {path}: {e}") from e

        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def copy(self, source: PathLike, destination: PathLike):
        """
        Copy a file without overwriting.

        Raises:
            SettingsIOError: If the source is missing, the destination
                already exists, or the copy fails
        """
        source = Path(source)
        destination = Path(destination)
        self._ensure_writable(destination)

        if not source.is_file():
            raise SettingsIOError(f"Cannot copy {source}: file does not exist")
        if destination.exists():
            raise SettingsIOError(f"Cannot copy to {destination}: file already exists")

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise SettingsIOError(f"Failed to copy {source} to {destination}: {e}") from e

        logger.debug(f"Copied {source} to {destination}")

    def delete(self, path: PathLike):
        path = Path(path)
        self._ensure_writable(path)

        try:
            path.unlink()
        except FileNotFoundError as e:
            raise SettingsIOError(f"Cannot delete {path}: file does not exist") from e
        except OSError as e:
            raise SettingsIOError(f"Failed to delete {path}: {e}") from e

        logger.debug(f"Deleted {path}")

    def _ensure_writable(self, path: Path):
        # The cache root wins when the roots overlap
        if self._is_under(path, self.bundle_root) and not self._is_under(path, self.cache_root):
            raise SettingsIOError(f"Refusing to modify bundled file {path}")

    @staticmethod
    def _is_under(path: Path, root: Path) -> bool:
        try:
            path.resolve().relative_to(root.resolve())
        except ValueError:
            return False
        return True

    @staticmethod
    def _discard(path: Path):
        try:
            path.unlink()
        except OSError:
            # Temp file may never have been created
            pass
