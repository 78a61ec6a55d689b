"""
Setting domain model.

A setting is a single durable key/value record. The key is its sole identity;
the value is free text and may contain spaces or be empty.
"""

from __future__ import annotations

from pydantic import field_validator

from src.core.domain.base import ValueObject


class Setting(ValueObject):
    """A single key/value record managed by a settings repository."""

    key: str
    value: str = ""

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Reject keys that are empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError("Setting key cannot be empty")
        return v

    def as_pair(self) -> tuple[str, str]:
        return self.key, self.value
