"""
Handler for ``settings delete <key>``.
"""

from __future__ import annotations

import logging

from src.core.commands.command import Command
from src.core.commands.handlers.base_handler import (
    ARGUMENT_INDEX,
    BaseSettingsHandler,
)
from src.core.commands.registry import command
from src.core.constants import SETTING_DELETE_FAILED_MESSAGE, SETTING_DELETED_MESSAGE
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult

logger = logging.getLogger(__name__)


@command("delete")
class DeleteSettingHandler(BaseSettingsHandler):
    """Removes a single setting. Tokens after the key are ignored."""

    def __init__(self) -> None:
        super().__init__("delete")

    @property
    def description(self) -> str:
        return "Remove a setting."

    @property
    def usage(self) -> str:
        return "settings delete <key>"

    def execute(self, command: Command, context: ExecutionContext) -> DispatchResult:
        key = self.require_key(command)
        extra = command.slice(ARGUMENT_INDEX + 1)
        if extra:
            logger.debug("Ignoring extra tokens after key %s: %s", key, extra)

        result = context.store.delete(key)
        if result:
            message = SETTING_DELETED_MESSAGE.format(key=key)
        else:
            message = SETTING_DELETE_FAILED_MESSAGE.format(key=key)
        context.emit(message)

        return DispatchResult(
            success=result.success,
            name=self.name,
            message=message,
            payload={
                "key": key,
                "outcome": result.outcome.value,
                "detail": result.detail,
            },
        )
