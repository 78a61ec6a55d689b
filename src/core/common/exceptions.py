"""
Common exception classes for the settings console.

This module defines custom exception classes used throughout the application
for better error handling and categorization.
"""

from __future__ import annotations


class SettingsConsoleError(Exception):
    """Base exception class for all settings console errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class ConfigurationError(SettingsConsoleError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class StorageError(SettingsConsoleError):
    """Raised when the settings store cannot complete a read or write."""

    def __init__(
        self,
        message: str = "Settings storage operation failed",
        key: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.key = key


class ValidationError(SettingsConsoleError):
    """Raised when validation fails."""

    def __init__(
        self, message: str = "Validation failed", details: dict | None = None, **kwargs
    ):
        super().__init__(message, details, **kwargs)


class MalformedCommandError(SettingsConsoleError):
    """Raised when an owned command is missing required tokens."""

    def __init__(
        self,
        message: str = "Malformed command",
        command_name: str | None = None,
        details: dict | None = None,
    ):
        det = details.copy() if details else {}
        if command_name:
            det.setdefault("command_name", command_name)
        super().__init__(message, det)


class GrammarError(SettingsConsoleError):
    """Raised when a grammar tree is declared incorrectly."""

    def __init__(
        self,
        message: str = "Invalid grammar declaration",
        token: str | None = None,
        details: dict | None = None,
    ):
        det = details.copy() if details else {}
        if token is not None:
            det.setdefault("token", token)
        super().__init__(message, det)
