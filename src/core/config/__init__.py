# Configuration package

from src.core.config.app_config import (
    AppConfig,
    LoggingConfig,
    LogLevel,
    StoreBackend,
    StoreConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "LogLevel",
    "LoggingConfig",
    "StoreBackend",
    "StoreConfig",
    "load_config",
]
