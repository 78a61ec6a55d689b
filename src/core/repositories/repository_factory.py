from __future__ import annotations

import logging

from src.core.common.exceptions import ConfigurationError
from src.core.config.app_config import StoreBackend, StoreConfig
from src.core.constants import CONFIG_STORE_PATH_REQUIRED_ERROR
from src.core.interfaces.repositories_interface import ISettingsRepository
from src.core.repositories.in_memory_settings_repository import (
    InMemorySettingsRepository,
)
from src.core.repositories.json_file_settings_repository import (
    JsonFileSettingsRepository,
)
from src.core.repositories.sqlite_settings_repository import (
    SqliteSettingsRepository,
)

logger = logging.getLogger(__name__)


def create_settings_repository(config: StoreConfig) -> ISettingsRepository:
    """Build the settings repository selected by ``config``.

    Raises:
        ConfigurationError: If a file-backed store has no path or its file
            cannot be parsed
        StorageError: If the SQLite database cannot be opened
    """
    logger.debug("Using %s settings store at %s", config.backend.value, config.path)
    if config.backend is StoreBackend.MEMORY:
        return InMemorySettingsRepository()
    if not config.path:
        raise ConfigurationError(
            CONFIG_STORE_PATH_REQUIRED_ERROR.format(backend=config.backend.value)
        )
    if config.backend is StoreBackend.JSON:
        return JsonFileSettingsRepository(config.path)
    return SqliteSettingsRepository(config.path)
