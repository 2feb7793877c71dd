"""
File watcher for the Touchégg configuration file.

Monitors the configuration file for changes and triggers a reload for every
modification, creation or rename onto the file.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

WATCH_WARNING_MESSAGE = (
    "It was not possible to monitor your configuration file for changes. "
    "Touchégg will not be able to automatically reload your configuration "
    "when you change it. You will need to restart Touchégg to apply your "
    "configuration changes"
)


class ConfigFileHandler(FileSystemEventHandler):
    """Handles file system events for the configuration file."""

    def __init__(self, config_path: Path, callback: Callable[[], object]):
        """
        Initialize file handler.

        Args:
            config_path: Resolved path of the configuration file
            callback: Function to call on every change of the file
        """
        super().__init__()
        self.config_path = config_path
        self.callback = callback

    def _is_config_file(self, path) -> bool:
        if isinstance(path, bytes):
            path = path.decode()
        return bool(path) and Path(path) == self.config_path

    def on_modified(self, event: FileSystemEvent):
        """Handle file modification event."""
        if not event.is_directory and self._is_config_file(event.src_path):
            self._trigger_reload(event)

    def on_created(self, event: FileSystemEvent):
        """Handle file creation event."""
        if not event.is_directory and self._is_config_file(event.src_path):
            self._trigger_reload(event)

    def on_moved(self, event: FileSystemEvent):
        """Handle editors that save by renaming a temporary file onto the config."""
        if not event.is_directory and self._is_config_file(event.dest_path):
            self._trigger_reload(event)

    def _trigger_reload(self, event: FileSystemEvent):
        logger.debug(f"Configuration file event: {event.event_type}")
        try:
            self.callback()
        except Exception as e:
            # The observer thread must survive a failed reload
            logger.error(f"Error reloading configuration: {e}")


class FileWatcher:
    """Watches the configuration file and triggers reloads."""

    def __init__(self, config_path: Path, reload_callback: Callable[[], object]):
        """
        Initialize file watcher.

        Args:
            config_path: Configuration file to watch
            reload_callback: Function to call on file changes
        """
        self.config_path = config_path
        self.reload_callback = reload_callback

        self.observer: Optional[Observer] = None
        self.handler: Optional[ConfigFileHandler] = None
        self.running = False

    def start(self) -> bool:
        """
        Start file watcher.

        Failing to set up the watch is not fatal: a warning is logged and the
        configuration loaded at startup stays in use.

        Returns:
            True if the file is being watched, False otherwise
        """
        if self.running:
            logger.warning("File watcher already running")
            return True

        logger.info(f"Starting file watcher for {self.config_path}")

        self.handler = ConfigFileHandler(
            config_path=self.config_path,
            callback=self.reload_callback
        )

        # The directory is watched so that files replaced by rename are still seen
        try:
            self.observer = Observer()
            self.observer.schedule(
                self.handler,
                path=str(self.config_path.parent),
                recursive=False
            )
            self.observer.start()
        except OSError as e:
            logger.warning(WATCH_WARNING_MESSAGE)
            logger.debug(f"File watcher setup failed: {e}")
            self.observer = None
            self.handler = None
            return False

        self.running = True
        logger.info("File watcher started")
        return True

    def stop(self):
        """Stop file watcher."""
        if not self.running:
            return

        logger.info("Stopping file watcher")

        if self.observer:
            self.observer.stop()
            self.observer.join()

        self.running = False
        logger.info("File watcher stopped")

    def is_running(self) -> bool:
        """
        Check if file watcher is running.

        Returns:
            True if running, False otherwise
        """
        return self.running
