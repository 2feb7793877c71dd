"""
XML configuration loader.

Bootstraps the user configuration file, loads it into a gesture store and
keeps the store in sync with the file while the process runs.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from ..errors import ConfigParseError
from ..models import LoaderSettings
from ..state import LoaderState
from ..store import GestureConfigStore
from .bootstrap import copy_config_if_not_present
from .file_watcher import FileWatcher
from .parser import XmlConfigParser
from .paths import get_home_path

logger = logging.getLogger(__name__)


class XmlConfigLoader:
    """
    Loads ~/.config/touchegg/touchegg.conf into a gesture store.

    Construction copies the default configuration if the user has none yet;
    load() parses the file and starts watching it for changes.
    """

    def __init__(self, store: GestureConfigStore, settings: Optional[LoaderSettings] = None):
        """
        Initialize configuration loader.

        Args:
            store: Store receiving the gesture bindings
            settings: Loader settings (read from the environment if None)

        Raises:
            HomeResolutionError: If the home directory cannot be resolved
            MissingDefaultConfigError: If the system-wide default is not installed
            BootstrapError: If the user configuration file cannot be created
        """
        self.store = store
        self.settings = settings or LoaderSettings.from_environment()
        self.parser = XmlConfigParser(store)
        self.state = LoaderState()

        self.config_path: Optional[Path] = None
        self.file_watcher: Optional[FileWatcher] = None

        copy_config_if_not_present(self.settings)

    def load(self):
        """
        Load the configuration file and start watching it.

        Raises:
            HomeResolutionError: If the home directory cannot be resolved
            ConfigParseError: If the configuration file cannot be parsed
        """
        home_path = get_home_path()
        config_path = self.settings.user_config_path(home_path)
        self.config_path = config_path

        logger.info(f"Loading configuration from {config_path}")
        registrations = self.parser.parse(config_path)
        self.state.record_load(config_path, registrations, time.time())
        logger.info(f"Configuration loaded: {registrations} gestures registered")

        if self.settings.watch:
            self.watch_file(config_path)
        else:
            logger.info("Configuration file watching disabled")

    def reload(self) -> bool:
        """
        Replace the store contents with the current contents of the file.

        Called by the file watcher for every change. The document is parsed
        before the store is cleared, so a file that cannot be parsed leaves
        the previously loaded gestures in place.

        Returns:
            True if the configuration was reloaded, False otherwise
        """
        if self.config_path is None:
            logger.warning("Reload requested before the configuration was loaded")
            return False

        logger.info("Your configuration file changed, reloading your settings")
        start_time = time.time()

        try:
            bindings = self.parser.read(self.config_path)
        except ConfigParseError as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(f"Configuration reload failed: {e.message}")
            logger.error(f"  → {e.suggestion}")
            logger.warning("Keeping previously loaded gestures")
            self.state.record_reload_attempt(False, duration_ms, e.to_dict())
            return False

        with self.store.transaction():
            self.store.clear()
            registrations = self.parser.apply(bindings)

        duration_ms = int((time.time() - start_time) * 1000)
        self.state.record_load(self.config_path, registrations, time.time())
        self.state.record_reload_attempt(True, duration_ms)
        logger.info(f"Configuration reloaded: {registrations} gestures registered ({duration_ms}ms)")
        return True

    def watch_file(self, config_path: Path) -> bool:
        """
        Start watching the configuration file.

        Returns:
            True if live reload is active, False if it could not be set up
        """
        if self.file_watcher and self.file_watcher.is_running():
            return True

        self.file_watcher = FileWatcher(
            config_path=config_path,
            reload_callback=self.reload
        )
        self.state.file_watcher_active = self.file_watcher.start()
        return self.state.file_watcher_active

    def close(self):
        """Stop watching the configuration file."""
        if self.file_watcher:
            self.file_watcher.stop()
            self.file_watcher = None
        self.state.file_watcher_active = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
