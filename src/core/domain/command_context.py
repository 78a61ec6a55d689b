from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from src.core.interfaces.repositories_interface import ISettingsRepository


@dataclass(slots=True)
class ExecutionContext:
    """Per-invocation capabilities handed to the dispatcher by the host.

    The dispatcher and handlers only use what is passed here; nothing is
    retained between invocations.
    """

    store: ISettingsRepository
    verbosity: int = 0
    output: TextIO = field(default_factory=lambda: sys.stdout)

    def emit(self, line: str = "") -> None:
        """Write one logical record to the output sink."""
        self.output.write(f"{line}\n")
