"""
Dispatch Results Domain Model

This module defines the value returned to the host for every command line
offered to the settings subsystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DispatchResult:
    """
    Result of offering one command line to the dispatcher.

    ``handled`` is False when the command does not belong to this subsystem;
    the host should then try other subsystems. ``success`` reports whether the
    requested operation happened and ``payload`` carries structured data
    (fetched settings, mutation outcome, error description).
    """

    success: bool
    handled: bool = True
    name: str = ""
    message: str = ""
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def not_handled(cls) -> DispatchResult:
        """Neutral result for commands outside this subsystem's grammar."""
        return cls(success=True, handled=False)

    @classmethod
    def failure(
        cls, name: str, message: str, payload: dict[str, Any] | None = None
    ) -> DispatchResult:
        return cls(success=False, name=name, message=message, payload=payload or {})

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "payload": dict(self.payload)}
