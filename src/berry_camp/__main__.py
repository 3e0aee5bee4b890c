"""
Command-line entry point for Berry Camp.
Usage: python -m berry_camp [CATALOG] [ADDRESS] [--paths] [--teleport]
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

from . import __version__
from .address import AddressCodec
from .catalog import AddressEnumerator, CatalogIntegrityError, CatalogLoadError, CatalogStore
from .selection import SelectionSync
from .settings import CampPreferences, CampSettings, ConfigError
from .teleport import TeleportClient
from .utils.logging_config import setup_logging

EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="berry_camp", description="Browse game rooms and teleport to them."
    )
    parser.add_argument("catalog", nargs="?", type=Path, help="Catalog JSON file or directory")
    parser.add_argument("address", nargs="?", help="Address such as /celeste/city?side=a&room=1")
    parser.add_argument("--paths", action="store_true", help="Print every chapter page path")
    parser.add_argument("--teleport", action="store_true", help="Teleport to the selected room")
    parser.add_argument("--port", type=int, help="Remote control port for this run")
    parser.add_argument("--profile", default="default", help="Settings profile")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_catalog_path(arg: Optional[Path], settings: CampSettings) -> Path:
    """Pick the catalog from the command line or the settings."""
    path = arg or settings.catalog_path
    if path is None:
        raise ConfigError("No catalog given and no catalog path configured")
    return path


def print_selection(sync: SelectionSync) -> None:
    chapter = sync.chapter
    side = sync.side
    print(f"{sync.area.name} / {chapter.title} ({chapter.game_id})")
    print(f"{side.name}-side: {side.room_count_label}")
    room = sync.selected_room
    if room is not None:
        label = f"{room.id} - {room.name}" if room.name else room.id
        if sync.state.subroom:
            label += f" (view {sync.state.subroom})"
        print(f"Room: {label}")
    print(f"Address: {sync.address}")


def run_teleport(sync: SelectionSync, preferences: CampPreferences, timeout_ms: int) -> None:
    """Dispatch a teleport and wait for its outcome."""
    target = sync.teleport_target()
    if target is None:
        print("No room selected, nothing to teleport to")
        return

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    app.setApplicationName("berry_camp")
    client = TeleportClient(preferences, timeout_ms=timeout_ms)
    loop = QEventLoop()

    def on_dispatched(url: str) -> None:
        print(f"Teleported: {url}")
        loop.quit()

    def on_failed(url: str, message: str) -> None:
        print(f"Game not reachable on port {client.port}: {message}")
        loop.quit()

    client.dispatched.connect(on_dispatched)
    client.failed.connect(on_failed)
    client.teleport(target)
    # Safety net in case the transport never reports back
    QTimer.singleShot(client.timeout_ms + 1000, loop.quit)
    loop.exec()


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    logger = logging.getLogger(f"{__name__}.main")
    args = build_parser().parse_args(argv)

    try:
        settings = CampSettings(profile=args.profile)
        setup_logging(settings)
        logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

        validation = settings.validate()
        for warning in validation.warnings:
            logger.warning(f"  {warning}")
        if not validation.is_valid:
            for error in validation.errors:
                logger.error(f"  {error}")

        store = CatalogStore.load(resolve_catalog_path(args.catalog, settings))
        codec = AddressCodec(store)

        if args.paths:
            for path in AddressEnumerator(store).iter_paths():
                print(path)
            return 0

        if not args.address:
            for area in store.iter_areas():
                print(f"{area.name} ({area.game_id})")
                for chapter in store.iter_chapters(area.id):
                    print(f"  /{area.id}/{chapter.id}  {chapter.title}")
            return 0

        preferences = settings.preferences()
        if args.port is not None:
            preferences = replace(preferences, port=args.port)

        sync = SelectionSync.from_address(codec, args.address, preferences)
        if sync is None:
            print("404 - Page could not be found")
            return EXIT_NOT_FOUND

        print_selection(sync)
        if args.teleport:
            run_teleport(sync, preferences, settings.teleport.timeout_ms)
        return 0

    except (ConfigError, CatalogLoadError, CatalogIntegrityError) as e:
        logger.error(str(e))
        return 1
    except Exception:
        logger.exception("Unhandled exception in main")
        return 1


if __name__ == "__main__":
    sys.exit(main())
