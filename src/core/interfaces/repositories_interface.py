from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from src.core.domain.setting import Setting
from src.core.domain.store_result import StoreResult


class ISettingsRepository(ABC):
    """Durable key/value store for settings.

    Implementations serialize their own operations, so a single instance may be
    shared by every command the host processes.
    """

    @abstractmethod
    def get(self, keys: Iterable[str]) -> dict[str, str]:
        """Return ``{key: value}`` for each requested key that exists.

        Unknown keys are simply absent from the result.

        Raises:
            StorageError: If the store cannot be read
        """

    @abstractmethod
    def set(self, key: str, value: str) -> StoreResult:
        """Create or overwrite the value stored under ``key``.

        A failed write leaves any previous value intact.

        Raises:
            ValueError: If ``key`` is empty
        """

    @abstractmethod
    def delete(self, key: str) -> StoreResult:
        """Remove ``key``; ``NOT_FOUND`` when it did not exist."""

    @abstractmethod
    def list_all(self) -> Iterator[Setting]:
        """Enumerate every stored setting once, in storage order."""

    def close(self) -> None:  # noqa: B027
        """Release any underlying resources."""
