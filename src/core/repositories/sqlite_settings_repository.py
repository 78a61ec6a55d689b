"""
SQLite backed settings repository.

Settings live in a ``settings`` table keyed by the setting name. Each write
runs in its own transaction; a failed write rolls back and the previous value
is kept.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Final

from src.core.common.exceptions import StorageError
from src.core.common.logging_utils import redact_setting_value
from src.core.constants import (
    STORAGE_DELETE_ERROR,
    STORAGE_READ_ERROR,
    STORAGE_WRITE_ERROR,
)
from src.core.domain.setting import Setting
from src.core.domain.store_result import StoreResult
from src.core.interfaces.repositories_interface import ISettingsRepository

logger = logging.getLogger(__name__)

_SCHEMA: Final = """
CREATE TABLE IF NOT EXISTS settings (
    key   TEXT PRIMARY KEY NOT NULL,
    value TEXT NOT NULL
)
"""

# Rows fetched per lock acquisition while enumerating
_FETCH_BATCH: Final = 100


class SqliteSettingsRepository(ISettingsRepository):
    """Settings repository persisted to an SQLite database."""

    def __init__(self, path: str | Path) -> None:
        """Open (and if needed create) the settings database.

        Args:
            path: Database file path, or ``":memory:"``

        Raises:
            StorageError: If the database cannot be opened or initialised
        """
        self.path = str(path)
        self._lock = threading.RLock()
        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self.path, check_same_thread=False)
            with self.conn:
                self.conn.execute(_SCHEMA)
        except (sqlite3.Error, OSError) as e:
            logger.error(
                "Failed to open settings database %s: %s", self.path, e, exc_info=True
            )
            raise StorageError(
                STORAGE_READ_ERROR.format(error=e), details={"path": self.path}
            ) from e

    def get(self, keys: Iterable[str]) -> dict[str, str]:
        wanted = list(dict.fromkeys(keys))
        if not wanted:
            return {}
        placeholders = ",".join("?" for _ in wanted)
        try:
            with self._lock:
                rows = self.conn.execute(
                    f"SELECT key, value FROM settings WHERE key IN ({placeholders})",
                    wanted,
                ).fetchall()
        except (sqlite3.Error, UnicodeError) as e:
            logger.error("Failed to read settings: %s", e, exc_info=True)
            raise StorageError(STORAGE_READ_ERROR.format(error=e)) from e
        found = dict(rows)
        # Keep the caller's key order
        return {key: found[key] for key in wanted if key in found}

    def set(self, key: str, value: str) -> StoreResult:
        setting = Setting(key=key, value=value)
        try:
            with self._lock, self.conn:
                self.conn.execute(
                    """
                    INSERT INTO settings (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    setting.as_pair(),
                )
        except (sqlite3.Error, UnicodeError) as e:
            logger.error("Failed to write setting %s: %s", key, e, exc_info=True)
            return StoreResult.storage_error(
                key, STORAGE_WRITE_ERROR.format(key=key, error=e)
            )
        logger.debug(
            "Stored setting %s = %r", key, redact_setting_value(key, value)
        )
        return StoreResult.applied(key)

    def delete(self, key: str) -> StoreResult:
        try:
            with self._lock, self.conn:
                cursor = self.conn.execute("DELETE FROM settings WHERE key = ?", (key,))
        except (sqlite3.Error, UnicodeError) as e:
            logger.error("Failed to delete setting %s: %s", key, e, exc_info=True)
            return StoreResult.storage_error(
                key, STORAGE_DELETE_ERROR.format(key=key, error=e)
            )
        if cursor.rowcount == 0:
            return StoreResult.not_found(key)
        logger.debug("Deleted setting %s", key)
        return StoreResult.applied(key)

    def list_all(self) -> Iterator[Setting]:
        try:
            with self._lock:
                cursor = self.conn.execute("SELECT key, value FROM settings")
            while True:
                with self._lock:
                    rows = cursor.fetchmany(_FETCH_BATCH)
                if not rows:
                    return
                for key, value in rows:
                    setting = _row_to_setting(key, value)
                    if setting is not None:
                        yield setting
        except sqlite3.Error as e:
            # Enumeration just ends; callers see a shorter listing
            logger.error("Failed to enumerate settings: %s", e, exc_info=True)

    def close(self) -> None:
        with self._lock:
            self.conn.close()


def _row_to_setting(key: object, value: object) -> Setting | None:
    """Build a Setting from a table row; rows other writers left unusable are skipped."""
    if key is None or not str(key).strip():
        logger.warning("Ignoring settings row with a blank key")
        return None
    return Setting(key=str(key), value="" if value is None else str(value))
