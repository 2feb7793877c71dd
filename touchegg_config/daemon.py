"""
Touchégg Configuration Daemon

Loads the gesture configuration into an in-memory store and keeps it in sync
with the configuration file until SIGINT/SIGTERM.
"""
# Module can be run with: python -m touchegg_config

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from touchegg_config.config import XmlConfigLoader, XmlConfigParser
from touchegg_config.errors import ConfigError
from touchegg_config.logging_config import setup_logging
from touchegg_config.models import LoaderSettings
from touchegg_config.store import GestureConfigStore, InMemoryGestureStore

logger = logging.getLogger(__name__)


class GestureConfigDaemon:
    """Keeps a gesture store loaded from the Touchégg configuration file."""

    def __init__(
        self,
        settings: Optional[LoaderSettings] = None,
        store: Optional[GestureConfigStore] = None
    ):
        """
        Initialize configuration daemon.

        Args:
            settings: Loader settings (read from the environment if None)
            store: Gesture store (a new InMemoryGestureStore if None)
        """
        self.settings = settings or LoaderSettings.from_environment()
        self.store = store if store is not None else InMemoryGestureStore()
        self.loader: Optional[XmlConfigLoader] = None
        self.running = False
        self._stop_event: Optional[asyncio.Event] = None

    async def start(self):
        """
        Load the configuration and wait until stop() is called.

        Raises:
            ConfigError: If bootstrap or the initial load fails
        """
        logger.info("Starting Touchégg configuration daemon")
        self._stop_event = asyncio.Event()

        self.loader = XmlConfigLoader(self.store, self.settings)
        self.loader.load()

        self.running = True
        state = self.loader.state
        watching = "enabled" if state.file_watcher_active else "disabled"
        logger.info(
            f"Daemon started: {state.registration_count} gestures from {state.config_path}, "
            f"live reload {watching}"
        )

        await self._stop_event.wait()

    async def stop(self):
        """Stop the daemon."""
        logger.info("Stopping daemon...")
        self.running = False

        if self.loader:
            self.loader.close()

        if self._stop_event:
            self._stop_event.set()

        logger.info("Daemon stopped")


def check_config(config_path: Path) -> int:
    """
    Parse a configuration file and print its gesture bindings as JSON.

    Returns:
        Exit status (0 if the file parsed, 1 otherwise)
    """
    parser = XmlConfigParser(InMemoryGestureStore())
    try:
        bindings = parser.read(config_path)
    except ConfigError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"  → {e.suggestion}", file=sys.stderr)
        return 1

    print(json.dumps([binding.model_dump() for binding in bindings], indent=2, ensure_ascii=False))
    registrations = sum(binding.registration_count() for binding in bindings)
    print(f"✅ {len(bindings)} gestures, {registrations} registrations", file=sys.stderr)
    return 0


async def main(settings: Optional[LoaderSettings] = None) -> int:
    """Main entry point."""
    daemon = GestureConfigDaemon(settings)

    # Setup signal handlers
    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.info("Received shutdown signal")
        asyncio.ensure_future(daemon.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        await daemon.start()
    except ConfigError as e:
        logger.error(e.message)
        if e.suggestion:
            logger.error(f"  → {e.suggestion}")
        await daemon.stop()
        return 1

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="touchegg-config",
        description="Load the Touchégg gesture configuration and reload it on change"
    )
    parser.add_argument("--check", metavar="FILE", help="Parse FILE, print its gestures as JSON and exit")
    parser.add_argument("--system-config-dir", help="Directory holding the default configuration")
    parser.add_argument("--config-file", help="Configuration file name")
    parser.add_argument("--no-watch", action="store_true", help="Do not reload the configuration on change")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug)

    if args.check:
        return check_config(Path(args.check))

    overrides = {}
    if args.system_config_dir:
        overrides["system_config_dir"] = Path(args.system_config_dir)
    if args.config_file:
        overrides["config_file"] = args.config_file
    if args.no_watch:
        overrides["watch"] = False

    try:
        settings = LoaderSettings(**{**LoaderSettings.from_environment().model_dump(), **overrides})
    except ValidationError as e:
        parser.error(str(e))

    return asyncio.run(main(settings))


if __name__ == "__main__":
    sys.exit(cli())
