"""
Settings path resolution.

Maps a settings identity to its current, template and backup files.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..config.defaults import BACKUP_EXTENSION, SETTINGS_EXTENSION


@dataclass(frozen=True)
class SettingsPaths:
    """The three files belonging to one settings identity."""
    current: Path
    template: Path
    backup: Path


def resolve_paths(
    name: str,
    cache_root: Union[str, Path],
    bundle_root: Union[str, Path],
) -> SettingsPaths:
    """
    Resolve the settings files for an identity.

    Pure function of its arguments, nothing is touched on disk.

    Args:
        name: Settings identity (already validated)
        cache_root: Writable directory for current and backup files
        bundle_root: Read-only directory holding templates

    Returns:
        SettingsPaths with current, template and backup locations
    """
    file_name = f"{name}{SETTINGS_EXTENSION}"
    current = Path(cache_root) / file_name

    return SettingsPaths(
        current=current,
        template=Path(bundle_root) / file_name,
        backup=current.with_name(file_name + BACKUP_EXTENSION),
    )
