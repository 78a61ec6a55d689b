"""
JSON file backed settings repository.

Settings are kept as a single JSON object (``{"key": "value"}``). Every write
replaces the file atomically so a failed write never leaves a half-written
file behind and the previous value stays in effect.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path

from src.core.common.exceptions import ConfigurationError
from src.core.common.logging_utils import redact_setting_value
from src.core.constants import STORAGE_DELETE_ERROR, STORAGE_WRITE_ERROR
from src.core.domain.setting import Setting
from src.core.domain.store_result import StoreResult
from src.core.interfaces.repositories_interface import ISettingsRepository

logger = logging.getLogger(__name__)


class JsonFileSettingsRepository(ISettingsRepository):
    """Settings repository persisted to a JSON file."""

    def __init__(self, path: str | Path) -> None:
        """Load the settings file, creating an empty store if it is missing.

        Args:
            path: Location of the JSON settings file

        Raises:
            ConfigurationError: If the file exists but cannot be read or parsed
        """
        self.path = Path(path)
        self._lock = threading.RLock()
        self._settings: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            logger.error(
                "Failed to parse settings file %s as JSON: %s",
                self.path,
                e,
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to parse settings file {self.path.name} as JSON.",
                details={"path": str(self.path)},
            ) from e
        except OSError as e:
            logger.error(
                "Failed to read settings file %s: %s", self.path, e, exc_info=True
            )
            raise ConfigurationError(
                f"Failed to read settings file {self.path.name}.",
                details={"path": str(self.path)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file {self.path.name} must contain a JSON object.",
                details={"path": str(self.path)},
            )
        settings: dict[str, str] = {}
        for k, v in data.items():
            if not str(k).strip():
                logger.warning("Ignoring blank key in settings file %s", self.path)
                continue
            settings[str(k)] = "" if v is None else str(v)
        return settings

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

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
            updated = dict(self._settings)
            updated[setting.key] = setting.value
            try:
                self._write(updated)
            except (OSError, UnicodeError) as e:
                logger.error(
                    "Failed to write settings file %s: %s", self.path, e, exc_info=True
                )
                return StoreResult.storage_error(
                    key, STORAGE_WRITE_ERROR.format(key=key, error=e)
                )
            self._settings = updated
        logger.debug(
            "Stored setting %s = %r in %s",
            key,
            redact_setting_value(key, value),
            self.path,
        )
        return StoreResult.applied(key)

    def delete(self, key: str) -> StoreResult:
        with self._lock:
            if key not in self._settings:
                return StoreResult.not_found(key)
            updated = {k: v for k, v in self._settings.items() if k != key}
            try:
                self._write(updated)
            except (OSError, UnicodeError) as e:
                logger.error(
                    "Failed to write settings file %s: %s", self.path, e, exc_info=True
                )
                return StoreResult.storage_error(
                    key, STORAGE_DELETE_ERROR.format(key=key, error=e)
                )
            self._settings = updated
        logger.debug("Deleted setting %s from %s", key, self.path)
        return StoreResult.applied(key)

    def list_all(self) -> Iterator[Setting]:
        with self._lock:
            snapshot = list(self._settings.items())
        for key, value in snapshot:
            yield Setting(key=key, value=value)
