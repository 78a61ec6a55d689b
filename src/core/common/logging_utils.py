"""
Logging utilities for the application.

This module provides utilities for logging, including:
- Redaction of secret-looking setting values
- Test/production environment tagging
- structlog wiring on top of the standard library logging tree
"""

import logging
import os
import sys
from typing import Any, Literal

import structlog

DEFAULT_LOG_FORMAT = (
    "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"
)

# Substrings that mark a setting key as holding a secret value
SENSITIVE_KEY_MARKERS = (
    "api_key",
    "apikey",
    "password",
    "passwd",
    "secret",
    "token",
    "credential",
)


def _is_running_under_pytest() -> bool:
    """Detect if we're running under pytest.

    Returns:
        True if running under pytest, False otherwise
    """
    return "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST") is not None


def _get_environment_tag() -> str:
    """Get the environment tag for logging.

    Returns:
        'test' if running under pytest, 'prod' otherwise
    """
    return "test" if _is_running_under_pytest() else "prod"


class EnvironmentTaggingFilter(logging.Filter):
    """Logging filter that adds environment tags to log records."""

    def __init__(self) -> None:
        super().__init__()
        self._env_tag = _get_environment_tag()

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.env_tag = self._env_tag
        return True


class EnvironmentTaggingFormatter(logging.Formatter):
    """Logging formatter that includes environment tags."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
    ) -> None:
        super().__init__(fmt or DEFAULT_LOG_FORMAT, datefmt, style=style)

    def format(self, record: logging.LogRecord) -> str:
        # Records emitted before the filter is installed still need the field
        if not hasattr(record, "env_tag"):
            record.env_tag = _get_environment_tag()
        return super().format(record)


def configure_structlog() -> None:
    """Render structlog events through the standard library logging tree.

    Events then honour the stdlib levels and handlers and never reach stdout
    through structlog's default print logger.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(
                key_order=["event"], drop_missing=True
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore


def redact(value: str, mask: str = "***") -> str:
    """Redact a sensitive value.

    Args:
        value: The value to redact
        mask: The mask to use

    Returns:
        The redacted value
    """
    if not value:
        return value

    # Keep first and last two characters
    if len(value) > 6:
        return f"{value[0:2]}{mask}{value[-2:]}"
    else:
        return mask


def is_sensitive_key(key: str) -> bool:
    """Return True when a setting key looks like it names a secret."""
    normalized = key.casefold().replace("-", "_").replace(".", "_")
    return any(marker in normalized for marker in SENSITIVE_KEY_MARKERS)


def redact_setting_value(key: str, value: str, mask: str = "***") -> str:
    """Mask ``value`` when ``key`` looks like it holds a secret."""
    if is_sensitive_key(key):
        return redact(value, mask)
    return value


def _find_tagging_filter(
    target: logging.Logger | logging.Handler,
) -> EnvironmentTaggingFilter | None:
    for existing in target.filters:
        if isinstance(existing, EnvironmentTaggingFilter):
            return existing
    return None


def install_environment_tagging() -> None:
    """Install environment tagging filter on the root logger and its handlers."""
    root = logging.getLogger()
    filter_instance = _find_tagging_filter(root)
    if filter_instance is None:
        filter_instance = EnvironmentTaggingFilter()
        root.addFilter(filter_instance)

    for handler in list(root.handlers):
        if _find_tagging_filter(handler) is None:
            handler.addFilter(filter_instance)
        if isinstance(handler.formatter, logging.Formatter) and not isinstance(
            handler.formatter, EnvironmentTaggingFormatter
        ):
            handler.setFormatter(
                EnvironmentTaggingFormatter(
                    fmt=handler.formatter._fmt, datefmt=handler.formatter.datefmt
                )
            )


def configure_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure logging with environment tagging.

    Log records go to stderr (and optionally a file) so they never mix with
    the command output written to stdout.

    Args:
        level: Logging level (number or name)
        log_file: Optional log file path
        log_format: Optional log format string
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = EnvironmentTaggingFormatter(fmt=log_format)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    install_environment_tagging()
    configure_structlog()


class LogContext:
    """Context manager for adding context to logs."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context: Any):
        """Initialize the context manager.

        Args:
            logger: The logger to use
            **context: The context to add
        """
        self.logger = logger
        self.context = context
        self.bound_logger: structlog.stdlib.BoundLogger | None = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, *args: Any) -> None:
        self.bound_logger = None


# Hosts that embed the dispatcher without calling configure_logging() still
# get structlog events routed through stdlib logging.
if not structlog.is_configured():
    configure_structlog()
