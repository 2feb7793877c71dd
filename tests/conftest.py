"""Pytest configuration and fixtures for touchegg-config tests."""

import logging
import sys
import time
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest

# Add the package root to Python path BEFORE test collection
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from touchegg_config.logging_config import LOGGER_NAME  # noqa: E402
from touchegg_config.models import LoaderSettings  # noqa: E402
from touchegg_config.store import GestureConfigStore  # noqa: E402


SAMPLE_CONFIG = """<touchegg>
  <settings>
    <property name="animation_delay">150</property>
    <property name="action_execute_threshold">20</property>
  </settings>

  <application name="All">
    <gesture type="SWIPE" fingers="3" direction="UP">
      <action type="MAXIMIZE_RESTORE_WINDOW">
        <animate>true</animate>
        <color>3E9FED</color>
      </action>
    </gesture>

    <gesture type="PINCH" fingers="4" direction="IN">
      <action type="CLOSE_WINDOW">
        <animate>true</animate>
      </action>
    </gesture>
  </application>

  <application name="Google-chrome,Chromium-browser">
    <gesture type="SWIPE" fingers="3" direction="LEFT">
      <action type="SEND_KEYS">
        <repeat>true</repeat>
        <modifiers>Control_L</modifiers>
        <keys>Shift_L+Tab</keys>
        <decreaseKeys>Tab</decreaseKeys>
      </action>
    </gesture>
  </application>
</touchegg>
"""

# Gesture blocks and store registrations declared by SAMPLE_CONFIG
SAMPLE_GESTURES = 3
SAMPLE_REGISTRATIONS = 4

RUN_COMMAND_CONFIG = (
    '<touchegg><application name="all">'
    '<gesture type="SWIPE" fingers="3" direction="LEFT">'
    '<action type="RUN_COMMAND"><command>echo hi</command></action>'
    '</gesture></application></touchegg>'
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove loader settings from the environment."""
    for name in (
        "TOUCHEGG_SYSTEM_CONFIG_DIR",
        "TOUCHEGG_HOME_CONFIG_DIR",
        "TOUCHEGG_CONFIG_FILE",
        "TOUCHEGG_WATCH_CONFIG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def home_dir(tmp_path, monkeypatch) -> Path:
    """Temporary home directory exported as $HOME."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def system_config_dir(tmp_path) -> Path:
    """Temporary /usr/share/touchegg with the sample configuration installed."""
    usr_share = tmp_path / "usr-share-touchegg"
    usr_share.mkdir()
    (usr_share / "touchegg.conf").write_text(SAMPLE_CONFIG)
    return usr_share


@pytest.fixture
def settings(system_config_dir) -> LoaderSettings:
    """Loader settings pointing at the temporary system directory, no watching."""
    return LoaderSettings(system_config_dir=system_config_dir, watch=False)


@pytest.fixture
def user_config_path(home_dir, settings) -> Path:
    """Path of the user configuration file inside the temporary home."""
    return settings.user_config_path(home_dir)


@pytest.fixture
def mock_store():
    """Mock gesture store recording every call."""
    return MagicMock(spec=GestureConfigStore)


@pytest.fixture
def write_config(tmp_path) -> Callable[..., Path]:
    """Write an XML document to a file and return its path."""
    def _write(xml: str, path: Path = None) -> Path:
        path = path or tmp_path / "touchegg.conf"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(xml)
        return path
    return _write


def wait_for(condition: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll condition until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.05)
    return condition()


def store_call_names(store: MagicMock) -> list:
    """Names of the clear()/save_gesture_config() calls made on a mock store, in order."""
    return [
        name for name, _args, _kwargs in store.mock_calls
        if name in ("clear", "save_gesture_config")
    ]
