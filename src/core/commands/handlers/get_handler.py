"""
Handler for ``settings get <key> [key ...]``.

All keys are fetched in a single store call. Keys that do not exist are
silently left out of the output.
"""

from __future__ import annotations

from src.core.commands.command import Command
from src.core.commands.handlers.base_handler import (
    ARGUMENT_INDEX,
    BaseSettingsHandler,
)
from src.core.commands.registry import command
from src.core.common.exceptions import MalformedCommandError
from src.core.constants import COMMAND_MISSING_KEY_ERROR
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult


@command("get")
class GetSettingsHandler(BaseSettingsHandler):
    """Prints the values of the requested settings."""

    def __init__(self) -> None:
        super().__init__("get")

    @property
    def description(self) -> str:
        return "Print the value of one or more settings."

    @property
    def usage(self) -> str:
        return "settings get <key> [key ...]"

    def execute(self, command: Command, context: ExecutionContext) -> DispatchResult:
        keys = [key for key in command.slice(ARGUMENT_INDEX) if key.strip()]
        if not keys:
            raise MalformedCommandError(
                COMMAND_MISSING_KEY_ERROR, command_name=self.name
            )

        found = context.store.get(keys)
        for key, value in found.items():
            self.write_record(context, key, value)

        return DispatchResult(
            success=True,
            name=self.name,
            payload={"settings": found},
        )
