from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, Field, field_validator, model_validator

from src.core.common.exceptions import ConfigurationError
from src.core.config.parameter_resolution import (
    ParameterResolution,
    ParameterSource,
    flatten,
)
from src.core.constants import CONFIG_UNSUPPORTED_FORMAT_ERROR
from src.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

# Environment variable -> dotted configuration path
ENV_VARIABLES: dict[str, str] = {
    "SETTINGS_STORE_BACKEND": "store.backend",
    "SETTINGS_STORE_PATH": "store.path",
    "SETTINGS_VERBOSITY": "verbosity",
    "SETTINGS_LOG_LEVEL": "logging.level",
    "SETTINGS_LOG_FILE": "logging.log_file",
}


def _env_to_int(name: str, default: int, env: Mapping[str, str]) -> int:
    """Return an environment variable parsed as an integer."""
    value = env.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s=%r", name, value)
        return default


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreBackend(str, Enum):
    """Available settings repository implementations."""

    MEMORY = "memory"
    JSON = "json"
    SQLITE = "sqlite"


DEFAULT_STORE_PATHS: dict[StoreBackend, str] = {
    StoreBackend.JSON: "settings.json",
    StoreBackend.SQLITE: "settings.db",
}


class StoreConfig(DomainModel):
    """Where settings are persisted."""

    backend: StoreBackend = StoreBackend.SQLITE
    path: str | None = None

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def default_path(self) -> StoreConfig:
        """Give file-backed stores a default location."""
        if self.backend is not StoreBackend.MEMORY and not self.path:
            self.path = DEFAULT_STORE_PATHS[self.backend]
        return self


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.WARNING
    log_file: str | None = None
    format: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class AppConfig(DomainModel):
    """Complete application configuration."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    # Host verbosity; > 4 announces the app, > 9 traces ``settings set``
    verbosity: int = Field(default=0, ge=0)

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(
        cls,
        *,
        environ: Mapping[str, str] | None = None,
        resolution: ParameterResolution | None = None,
    ) -> dict[str, Any]:
        """Collect configuration values supplied through environment variables.

        Returns:
            A nested mapping holding only the values the environment sets
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        config: dict[str, Any] = {}

        for name, path in ENV_VARIABLES.items():
            if name not in env:
                continue
            value: Any = env[name]
            if path == "verbosity":
                value = _env_to_int(name, 0, env)
            _set_by_path(config, path, value)
            if resolution is not None:
                resolution.record(
                    path, value, ParameterSource.ENVIRONMENT, origin=name
                )

        return config


def _merge_dicts(d1: dict[str, Any], d2: dict[str, Any]) -> dict[str, Any]:
    for k, v in d2.items():
        if k in d1 and isinstance(d1[k], dict) and isinstance(v, dict):
            _merge_dicts(d1[k], v)
        else:
            d1[k] = v
    return d1


def _set_by_path(target: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    current: dict[str, Any] = target
    for key in parts[:-1]:
        current = current.setdefault(key, {})
    current[parts[-1]] = value


def _load_config_file(path: Path) -> dict[str, Any]:
    from src.core.config.yaml_validation import load_yaml_file, validate_config_data

    if path.suffix.lower() not in (".yaml", ".yml"):
        raise ConfigurationError(
            CONFIG_UNSUPPORTED_FORMAT_ERROR.format(suffix=path.suffix),
            details={"path": str(path)},
        )
    file_config = load_yaml_file(path) or {}
    validate_config_data(file_config, path)
    return file_config


def load_config(
    config_path: str | Path | None = None,
    *,
    resolution: ParameterResolution | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration from defaults, file, environment and CLI overrides.

    Later sources win: defaults < YAML file < environment < ``overrides``.

    Args:
        config_path: Optional path to a YAML configuration file
        resolution: Optional tracker recording where each value came from
        environ: Environment mapping (defaults to ``os.environ``)
        overrides: Dotted-path values supplied on the command line

    Raises:
        ConfigurationError: If the file is unreadable, invalid, or the merged
            values do not validate
    """
    res = resolution or ParameterResolution()
    config_data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Configuration file not found: {config_path}")
        else:
            file_config = _load_config_file(path)
            _merge_dicts(config_data, file_config)
            for name, value in flatten(file_config).items():
                res.record(name, value, ParameterSource.CONFIG_FILE, origin=str(path))

    _merge_dicts(config_data, AppConfig.from_env(environ=environ, resolution=res))

    for name, value in (overrides or {}).items():
        if value is None:
            continue
        _set_by_path(config_data, name, value)
        res.record(name, value, ParameterSource.CLI)

    try:
        return AppConfig.model_validate(config_data)
    except ValueError as e:
        logger.critical(f"Invalid configuration: {e!s}")
        raise ConfigurationError(
            "Invalid configuration", details={"errors": str(e)}
        ) from e
