"""
Tests for the configuration loader.

Covers the startup sequence (bootstrap, initial load, watcher) and live
reload behaviour, including reloads of broken files.
"""

from unittest.mock import patch

import pytest

from conftest import RUN_COMMAND_CONFIG, SAMPLE_REGISTRATIONS, store_call_names, wait_for
from touchegg_config.config.loader import XmlConfigLoader
from touchegg_config.errors import ConfigParseError, MissingDefaultConfigError
from touchegg_config.models import LoaderSettings
from touchegg_config.store import InMemoryGestureStore


@pytest.fixture
def store():
    return InMemoryGestureStore()


class TestConstruction:
    """Test bootstrap on construction."""

    def test_construction_copies_default_config(self, home_dir, settings, store, user_config_path):
        XmlConfigLoader(store, settings)

        assert user_config_path.exists()

    def test_construction_does_not_load(self, home_dir, settings, mock_store):
        XmlConfigLoader(mock_store, settings)

        assert mock_store.mock_calls == []

    def test_missing_default_config_is_fatal(self, home_dir, tmp_path, store):
        settings = LoaderSettings(system_config_dir=tmp_path / "not-installed", watch=False)

        with pytest.raises(MissingDefaultConfigError):
            XmlConfigLoader(store, settings)

    def test_settings_default_to_environment(self, home_dir, system_config_dir, store, monkeypatch):
        monkeypatch.setenv("TOUCHEGG_SYSTEM_CONFIG_DIR", str(system_config_dir))
        monkeypatch.setenv("TOUCHEGG_WATCH_CONFIG", "false")

        loader = XmlConfigLoader(store)

        assert loader.settings.system_config_dir == system_config_dir
        assert loader.settings.watch is False


class TestLoad:
    """Test the initial load."""

    def test_load_populates_store(self, home_dir, settings, store, user_config_path):
        loader = XmlConfigLoader(store, settings)

        loader.load()

        assert len(store) == SAMPLE_REGISTRATIONS
        assert loader.config_path == user_config_path
        assert loader.state.config_path == user_config_path
        assert loader.state.registration_count == SAMPLE_REGISTRATIONS
        assert loader.state.config_load_timestamp is not None

    def test_load_does_not_clear_store(self, home_dir, settings, mock_store):
        XmlConfigLoader(mock_store, settings).load()

        assert store_call_names(mock_store) == ["save_gesture_config"] * SAMPLE_REGISTRATIONS

    def test_broken_initial_config_is_fatal(self, home_dir, settings, store, user_config_path):
        user_config_path.parent.mkdir(parents=True)
        user_config_path.write_text("<touchegg><application>")
        loader = XmlConfigLoader(store, settings)

        with pytest.raises(ConfigParseError):
            loader.load()

        assert len(store) == 0
        assert loader.file_watcher is None

    def test_watch_disabled(self, home_dir, settings, store):
        loader = XmlConfigLoader(store, settings)

        with patch("touchegg_config.config.loader.FileWatcher") as watcher_cls:
            loader.load()

        watcher_cls.assert_not_called()
        assert loader.state.file_watcher_active is False

    def test_watcher_started_after_initial_parse(self, home_dir, system_config_dir, store):
        settings = LoaderSettings(system_config_dir=system_config_dir, watch=True)
        loader = XmlConfigLoader(store, settings)
        seen_at_start = []

        with patch("touchegg_config.config.loader.FileWatcher") as watcher_cls:
            watcher_cls.return_value.start.side_effect = lambda: seen_at_start.append(len(store)) or True
            watcher_cls.return_value.is_running.return_value = True
            loader.load()

        watcher_cls.assert_called_once_with(config_path=loader.config_path, reload_callback=loader.reload)
        assert seen_at_start == [SAMPLE_REGISTRATIONS]
        assert loader.state.file_watcher_active is True

    def test_watcher_failure_is_not_fatal(self, home_dir, system_config_dir, store):
        settings = LoaderSettings(system_config_dir=system_config_dir, watch=True)
        loader = XmlConfigLoader(store, settings)

        with patch("touchegg_config.config.file_watcher.Observer", side_effect=OSError("inotify_init")):
            loader.load()

        assert len(store) == SAMPLE_REGISTRATIONS
        assert loader.state.file_watcher_active is False


class TestReload:
    """Test reloads triggered by file changes."""

    def test_reload_clears_before_saving(self, home_dir, settings, mock_store, user_config_path):
        loader = XmlConfigLoader(mock_store, settings)
        loader.load()
        mock_store.reset_mock()
        user_config_path.write_text(RUN_COMMAND_CONFIG)

        assert loader.reload() is True

        assert store_call_names(mock_store) == ["clear", "save_gesture_config"]
        mock_store.save_gesture_config.assert_called_once_with(
            "all", "SWIPE", "3", "LEFT", "RUN_COMMAND", {"command": "echo hi"}
        )

    def test_reload_replaces_previous_bindings(self, home_dir, settings, store, user_config_path):
        loader = XmlConfigLoader(store, settings)
        loader.load()
        user_config_path.write_text(RUN_COMMAND_CONFIG)

        loader.reload()

        assert len(store) == 1
        assert store.get_gesture_config("All", "SWIPE", "3", "UP") is None
        assert store.get_gesture_config("all", "SWIPE", "3", "LEFT").action_settings == {"command": "echo hi"}
        assert loader.state.registration_count == 1
        assert loader.state.reload_count == 1

    def test_broken_reload_keeps_previous_bindings(self, home_dir, settings, store, user_config_path):
        loader = XmlConfigLoader(store, settings)
        loader.load()
        user_config_path.write_text("<touchegg><application name='all'>")

        assert loader.reload() is False

        assert len(store) == SAMPLE_REGISTRATIONS
        assert loader.state.last_reload_success is False
        assert loader.state.telemetry["failed_reloads"] == 1
        assert loader.state.last_error["code"] == 1200

    def test_broken_reload_does_not_clear(self, home_dir, settings, mock_store, user_config_path):
        loader = XmlConfigLoader(mock_store, settings)
        loader.load()
        mock_store.reset_mock()
        user_config_path.unlink()

        assert loader.reload() is False

        assert store_call_names(mock_store) == []

    def test_reload_recovers_after_failure(self, home_dir, settings, store, user_config_path):
        loader = XmlConfigLoader(store, settings)
        loader.load()
        user_config_path.write_text("not xml")
        loader.reload()
        user_config_path.write_text(RUN_COMMAND_CONFIG)

        assert loader.reload() is True

        assert len(store) == 1
        assert loader.state.telemetry["total_reload_attempts"] == 2
        assert loader.state.telemetry["success_rate_percent"] == 50.0

    def test_reload_before_load(self, home_dir, settings, mock_store):
        loader = XmlConfigLoader(mock_store, settings)

        assert loader.reload() is False
        assert mock_store.mock_calls == []


class TestLiveReload:
    """Test the loader against a real file watcher."""

    def test_file_change_reloads_store(self, home_dir, system_config_dir, store, user_config_path):
        settings = LoaderSettings(system_config_dir=system_config_dir, watch=True)

        with XmlConfigLoader(store, settings) as loader:
            loader.load()
            if not loader.state.file_watcher_active:
                pytest.skip("File system notifications unavailable")

            user_config_path.write_text(RUN_COMMAND_CONFIG)

            assert wait_for(lambda: store.get_gesture_config("all", "SWIPE", "3", "LEFT") is not None)
            assert wait_for(lambda: len(store) == 1)

        assert loader.file_watcher is None
        assert loader.state.file_watcher_active is False
