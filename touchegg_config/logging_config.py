"""Logging configuration for the Touchégg configuration loader.

Provides:
- Configurable log levels (WARNING, INFO, DEBUG) from flags or $LOG_LEVEL
- Colored output when stderr is a terminal
"""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "touchegg_config"

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _level_from_environment() -> Optional[int]:
    level_name = os.environ.get("LOG_LEVEL", "").upper()
    level = logging.getLevelName(level_name) if level_name else None
    return level if isinstance(level, int) else None


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Configure logging for the loader.

    The daemon reports reloads at INFO level, so INFO is the default.
    $LOG_LEVEL overrides the default; --verbose and --debug override both.

    Args:
        verbose: Enable verbose logging (INFO level with timestamps)
        debug: Enable debug logging (DEBUG level)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove existing handlers
    logger.handlers.clear()

    if debug:
        level = logging.DEBUG
        log_format = DEBUG_FORMAT
    elif verbose:
        level = logging.INFO
        log_format = VERBOSE_FORMAT
    else:
        level = _level_from_environment() or logging.INFO
        log_format = DEFAULT_FORMAT

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    # Use colored formatter if terminal supports it
    if sys.stderr.isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
