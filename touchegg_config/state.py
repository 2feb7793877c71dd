"""
Loader state tracking.

Tracks the active configuration file, load timestamp, watcher status and
reload telemetry.
"""

from pathlib import Path
from typing import Optional


class LoaderState:
    """Current state of an XmlConfigLoader with reload telemetry."""

    def __init__(self):
        """Initialize loader state."""
        self.config_path: Optional[Path] = None
        self.config_load_timestamp: Optional[float] = None
        self.registration_count: int = 0
        self.file_watcher_active: bool = False
        self.reload_count: int = 0
        self.last_reload_success: bool = False
        self.last_error: Optional[dict] = None

        self.telemetry = self._empty_telemetry()

    @staticmethod
    def _empty_telemetry() -> dict:
        return {
            "total_reload_attempts": 0,
            "successful_reloads": 0,
            "failed_reloads": 0,
            "success_rate_percent": 0.0,
            "average_reload_duration_ms": 0,
            "last_reload_duration_ms": 0,
            "total_reload_time_ms": 0
        }

    def record_load(self, config_path: Path, registrations: int, timestamp: float):
        """Record a successful (initial or live) load of the configuration file."""
        self.config_path = config_path
        self.registration_count = registrations
        self.config_load_timestamp = timestamp

    def record_reload_attempt(self, success: bool, duration_ms: int, error: Optional[dict] = None):
        """
        Record reload attempt telemetry.

        Args:
            success: Whether reload succeeded
            duration_ms: Reload duration in milliseconds
            error: Error dictionary of the failure, if any
        """
        self.telemetry["total_reload_attempts"] += 1
        self.telemetry["last_reload_duration_ms"] = duration_ms
        self.telemetry["total_reload_time_ms"] += duration_ms

        self.last_reload_success = success
        if success:
            self.reload_count += 1
            self.telemetry["successful_reloads"] += 1
            self.last_error = None
        else:
            self.telemetry["failed_reloads"] += 1
            self.last_error = error

        attempts = self.telemetry["total_reload_attempts"]
        self.telemetry["success_rate_percent"] = round(
            (self.telemetry["successful_reloads"] / attempts) * 100,
            2
        )
        self.telemetry["average_reload_duration_ms"] = int(
            self.telemetry["total_reload_time_ms"] / attempts
        )

    def to_dict(self) -> dict:
        """
        Convert state to dictionary.

        Returns:
            State as dictionary with telemetry
        """
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "config_load_timestamp": self.config_load_timestamp,
            "registration_count": self.registration_count,
            "file_watcher_active": self.file_watcher_active,
            "reload_count": self.reload_count,
            "last_reload_success": self.last_reload_success,
            "last_error": self.last_error,
            "telemetry": self.telemetry
        }
