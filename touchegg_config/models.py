"""
Pydantic data models for the Touchégg configuration loader.

Attribute values (gesture type, fingers, direction, action type) are kept as
opaque strings; interpreting them is the job of whoever executes gestures.
"""

import os
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

USR_SHARE_CONFIG_DIR = "/usr/share/touchegg"
HOME_CONFIG_DIR = ".config/touchegg"
CONFIG_FILE = "touchegg.conf"


class GestureBinding(BaseModel):
    """One gesture block of the configuration file and the action bound to it."""

    applications: List[str] = Field(default_factory=list, description="Application identifiers (fan-out list)")
    gesture_type: str = Field("", description="Gesture type (e.g., SWIPE, PINCH, TAP)")
    fingers: str = Field("", description="Number of fingers, unparsed")
    direction: str = Field("", description="Gesture direction (e.g., LEFT, IN)")
    action_type: str = Field("", description="Action to execute (e.g., RUN_COMMAND)")
    action_settings: Dict[str, str] = Field(default_factory=dict, description="Action setting name -> value")

    def registration_count(self) -> int:
        """Number of store registrations this binding fans out to."""
        return len(self.applications)


class GestureActionConfig(BaseModel):
    """Action stored for one (application, gesture type, fingers, direction) key."""

    action_type: str
    action_settings: Dict[str, str] = Field(default_factory=dict)


class LoaderSettings(BaseModel):
    """Where the configuration file lives and whether to watch it."""

    system_config_dir: Path = Field(
        default=Path(USR_SHARE_CONFIG_DIR),
        description="Directory holding the system-wide default configuration"
    )
    home_config_dir: Path = Field(
        default=Path(HOME_CONFIG_DIR),
        description="User configuration directory, relative to the home directory"
    )
    config_file: str = Field(default=CONFIG_FILE, description="Configuration file name")
    watch: bool = Field(default=True, description="Reload the configuration when the file changes")

    @classmethod
    def from_environment(cls) -> "LoaderSettings":
        """Load settings from environment variables, falling back to the defaults."""
        return cls(
            system_config_dir=Path(os.getenv("TOUCHEGG_SYSTEM_CONFIG_DIR", USR_SHARE_CONFIG_DIR)),
            home_config_dir=Path(os.getenv("TOUCHEGG_HOME_CONFIG_DIR", HOME_CONFIG_DIR)),
            config_file=os.getenv("TOUCHEGG_CONFIG_FILE", CONFIG_FILE),
            watch=os.getenv("TOUCHEGG_WATCH_CONFIG", "true").lower() == "true",
        )

    @field_validator("config_file")
    @classmethod
    def validate_config_file(cls, v: str) -> str:
        """Validate the configuration file is a bare file name."""
        if not v.strip() or Path(v).name != v:
            raise ValueError(f"Configuration file must be a file name, got: {v!r}")
        return v

    @field_validator("home_config_dir")
    @classmethod
    def validate_home_config_dir(cls, v: Path) -> Path:
        """Validate the user configuration directory is relative to home."""
        if v.is_absolute():
            raise ValueError("home_config_dir must be relative to the home directory")
        return v

    def user_config_dir(self, home: Path) -> Path:
        return home / self.home_config_dir

    def user_config_path(self, home: Path) -> Path:
        return self.user_config_dir(home) / self.config_file

    def system_config_path(self) -> Path:
        return self.system_config_dir / self.config_file
