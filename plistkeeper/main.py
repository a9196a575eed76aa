"""
plistkeeper - command line entry point.

Diagnostic access to settings files by identity, without the typed
settings class:
    plistkeeper paths NAME
    plistkeeper show NAME
    plistkeeper delete NAME
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .config.defaults import LOG_DIR_NAME
from .config.roots import get_bundle_root, get_cache_root
from .core.codec import PlistCodec
from .core.errors import ConfigurationError, SettingsError
from .core.file_store import FileStore
from .core.paths import resolve_paths
from .utils import setup_logging, validate_settings_name

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plistkeeper",
        description="Inspect and manage property list settings files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--cache-dir", help="Writable settings directory (default: platform cache)")
    parser.add_argument("--bundle-dir", help="Directory holding bundled templates")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", action="store_true", help="Also log to a file under the cache root")

    commands = parser.add_subparsers(dest="command", required=True)
    for command, text in (
        ("paths", "Print the current, template and backup paths"),
        ("show", "Print the current settings file as JSON"),
        ("delete", "Delete the current settings file"),
    ):
        sub = commands.add_parser(command, help=text)
        sub.add_argument("name", help="Settings identity, usually the settings class name")

    return parser


def _file_store(args: argparse.Namespace) -> FileStore:
    cache_root = args.cache_dir or get_cache_root()
    bundle_root = args.bundle_dir or get_bundle_root()
    return FileStore(cache_root, bundle_root)


def _show(file_store: FileStore, current) -> int:
    if not file_store.exists(current):
        logger.error(f"No settings file at {current}")
        return 1

    try:
        data = PlistCodec().parse(file_store.read(current))
    except SettingsError as e:
        logger.error(str(e))
        return 1

    # bytes and datetimes have no JSON form
    print(json.dumps(data, indent=2, sort_keys=True, default=str))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the plistkeeper command."""
    args = build_parser().parse_args(argv)

    try:
        name = validate_settings_name(args.name)
        file_store = _file_store(args)
        setup_logging(
            log_level=args.log_level,
            log_file=args.log_file,
            log_dir=file_store.cache_root / LOG_DIR_NAME,
        )
    except (ConfigurationError, ValueError) as e:
        logger.error(str(e))
        return 2

    paths = resolve_paths(name, file_store.cache_root, file_store.bundle_root)

    if args.command == "paths":
        print(f"current:  {paths.current}")
        print(f"template: {paths.template}")
        print(f"backup:   {paths.backup}")
        return 0

    if args.command == "show":
        return _show(file_store, paths.current)

    try:
        file_store.delete(paths.current)
    except SettingsError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Deleted {paths.current}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
