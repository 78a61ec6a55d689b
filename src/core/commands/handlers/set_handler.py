"""
Handler for ``settings set <key> [value ...]``.

The key is the token right after ``set``; every later token is joined with
single spaces to rebuild a multi-word value. A missing value stores the empty
string.
"""

from __future__ import annotations

import logging

from src.core.commands.command import Command
from src.core.commands.handlers.base_handler import (
    ARGUMENT_INDEX,
    BaseSettingsHandler,
)
from src.core.commands.registry import command
from src.core.common.exceptions import ValidationError
from src.core.common.logging_utils import redact_setting_value
from src.core.constants import (
    SETTING_SET_FAILED_MESSAGE,
    SETTING_SET_MESSAGE,
    TRACE_KEY_LABEL,
    TRACE_RESULT_LABEL,
    TRACE_TOKENS_LABEL,
    TRACE_VALUE_LABEL,
)
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult

logger = logging.getLogger(__name__)

# Verbosity above which the computed key/value and store result are printed
TRACE_VERBOSITY = 9


def split_key_value(command: Command) -> tuple[str | None, str]:
    """Slice ``settings set <key> <value...>`` into key and joined value."""
    key = command.token(ARGUMENT_INDEX)
    value = " ".join(command.slice(ARGUMENT_INDEX + 1))
    return key, value


@command("set")
class SetSettingHandler(BaseSettingsHandler):
    """Creates or overwrites a setting."""

    def __init__(self) -> None:
        super().__init__("set")

    @property
    def description(self) -> str:
        return "Create or overwrite a setting. Values may span several words."

    @property
    def usage(self) -> str:
        return "settings set <key> [value ...]"

    def execute(self, command: Command, context: ExecutionContext) -> DispatchResult:
        key = self.require_key(command)
        _, value = split_key_value(command)

        try:
            result = context.store.set(key, value)
        except ValueError as e:
            raise ValidationError(str(e), details={"key": key}) from e

        if context.verbosity > TRACE_VERBOSITY:
            shown = redact_setting_value(key, value)
            tokens = list(command.tokens)
            if shown != value:
                tokens = tokens[: ARGUMENT_INDEX + 1] + [shown]
            self.write_record(context, TRACE_TOKENS_LABEL, tokens)
            self.write_record(context, TRACE_KEY_LABEL, key)
            self.write_record(context, TRACE_VALUE_LABEL, shown)
            self.write_record(
                context, TRACE_RESULT_LABEL, "true" if result else "false"
            )

        if result:
            message = SETTING_SET_MESSAGE.format(key=key)
        else:
            message = SETTING_SET_FAILED_MESSAGE.format(key=key)
            logger.warning("settings set %s failed: %s", key, result.detail)
        context.emit(message)

        return DispatchResult(
            success=result.success,
            name=self.name,
            message=message,
            payload={
                "key": key,
                "value": value,
                "outcome": result.outcome.value,
                "detail": result.detail,
            },
        )
