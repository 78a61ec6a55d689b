from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator

from src.core.common.logging_utils import redact_setting_value
from src.core.domain.setting import Setting
from src.core.domain.store_result import StoreResult
from src.core.interfaces.repositories_interface import ISettingsRepository

logger = logging.getLogger(__name__)


class InMemorySettingsRepository(ISettingsRepository):
    """In-memory implementation of the settings repository.

    This repository keeps settings in memory and does not persist them.
    It is suitable for development and testing.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize the in-memory settings repository.

        Args:
            initial: Optional settings to seed the repository with
        """
        self._lock = threading.RLock()
        self._settings: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, keys: Iterable[str]) -> dict[str, str]:
        with self._lock:
            return {
                key: self._settings[key]
                for key in dict.fromkeys(keys)
                if key in self._settings
            }

    def set(self, key: str, value: str) -> StoreResult:
        setting = Setting(key=key, value=value)
        with self._lock:
            self._settings[setting.key] = setting.value
        logger.debug(
            "Stored setting %s = %r",
            key,
            redact_setting_value(key, value),
        )
        return StoreResult.applied(key)

    def delete(self, key: str) -> StoreResult:
        with self._lock:
            if key not in self._settings:
                return StoreResult.not_found(key)
            del self._settings[key]
        logger.debug("Deleted setting %s", key)
        return StoreResult.applied(key)

    def list_all(self) -> Iterator[Setting]:
        with self._lock:
            snapshot = list(self._settings.items())
        for key, value in snapshot:
            yield Setting(key=key, value=value)
