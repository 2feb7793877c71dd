"""
Configuration subsystem for the Touchégg configuration loader.

Modules:
- paths: Resolve the user's home directory
- bootstrap: Copy the system-wide default configuration on first run
- parser: Parse the XML configuration into gesture bindings
- file_watcher: Monitor the configuration file for changes
- loader: Orchestrate bootstrap, initial load and live reload
"""

from .bootstrap import copy_config_if_not_present
from .file_watcher import FileWatcher
from .loader import XmlConfigLoader
from .parser import XmlConfigParser
from .paths import get_home_path

__all__ = [
    "copy_config_if_not_present",
    "FileWatcher",
    "XmlConfigLoader",
    "XmlConfigParser",
    "get_home_path",
]
