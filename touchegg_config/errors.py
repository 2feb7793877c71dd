"""
Error handling for the Touchégg configuration loader.

Every failure the loader can surface is a ConfigError carrying a structured
code, a human-readable message and a suggested recovery action.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

ISSUES_URL = "https://github.com/JoseExposito/touchegg/issues"


class ErrorCode(Enum):
    """
    Error codes for the configuration loader.

    - 1000-1099: Environment errors
    - 1100-1199: Installation errors
    - 1200-1299: Configuration file errors
    """

    # Environment errors (1000-1099)
    HOME_NOT_FOUND = 1000

    # Installation errors (1100-1199)
    DEFAULT_CONFIG_MISSING = 1100
    BOOTSTRAP_FAILED = 1101

    # Configuration file errors (1200-1299)
    CONFIG_PARSE_FAILED = 1200


class ConfigError(Exception):
    """Base exception for configuration loading errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class HomeResolutionError(ConfigError):
    """Neither $HOME nor the user account database yield a home directory."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.HOME_NOT_FOUND,
            message=f"Error getting your home directory path ({reason})",
            suggestion=f"Set the HOME environment variable or file a bug report at {ISSUES_URL}",
            context={"reason": reason}
        )


class MissingDefaultConfigError(ConfigError):
    """The system-wide default configuration is not installed."""

    def __init__(self, file_path: Union[str, Path]):
        super().__init__(
            code=ErrorCode.DEFAULT_CONFIG_MISSING,
            message=f"File {file_path} not found",
            suggestion="Reinstall Touchégg to solve this issue",
            context={"file_path": str(file_path)}
        )


class BootstrapError(ConfigError):
    """Copying the default configuration into the user directory failed."""

    def __init__(self, file_path: Union[str, Path], reason: str):
        super().__init__(
            code=ErrorCode.BOOTSTRAP_FAILED,
            message=f"Could not create your configuration file {file_path}: {reason}",
            suggestion="Check the permissions of your home configuration directory",
            context={"file_path": str(file_path), "reason": reason}
        )


class ConfigParseError(ConfigError):
    """The configuration document is missing or is not well-formed XML."""

    def __init__(self, file_path: Union[str, Path], reason: str):
        """
        Initialize configuration parse error.

        Args:
            file_path: Path to configuration file
            reason: Reason for parse failure
        """
        super().__init__(
            code=ErrorCode.CONFIG_PARSE_FAILED,
            message=f"Error parsing configuration file {file_path}: {reason}",
            suggestion="Fix the XML syntax of your configuration file or delete it to restore the defaults",
            context={"file_path": str(file_path), "reason": reason}
        )
