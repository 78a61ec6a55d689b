"""
Outcome of a settings store mutation.

Stores report whether a requested state change happened. ``bool(result)``
keeps the plain success/failure view for callers that only need that.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.core.constants import STORAGE_KEY_NOT_FOUND
from src.core.interfaces.model_bases import InternalDTO


class MutationOutcome(str, Enum):
    """What happened to the stored state."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True)
class StoreResult(InternalDTO):
    """Result of ``set``/``delete`` on a settings repository."""

    outcome: MutationOutcome
    key: str
    detail: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome is MutationOutcome.APPLIED

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def applied(cls, key: str) -> StoreResult:
        return cls(MutationOutcome.APPLIED, key)

    @classmethod
    def not_found(cls, key: str) -> StoreResult:
        return cls(
            MutationOutcome.NOT_FOUND, key, STORAGE_KEY_NOT_FOUND.format(key=key)
        )

    @classmethod
    def storage_error(cls, key: str, detail: str) -> StoreResult:
        return cls(MutationOutcome.STORAGE_ERROR, key, detail)
