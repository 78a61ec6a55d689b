from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from src.core.commands.command import Command
from src.core.commands.matcher import GrammarMatch
from src.core.common.exceptions import (
    MalformedCommandError,
    SettingsConsoleError,
)
from src.core.constants import (
    COMMAND_MISSING_KEY_ERROR,
    COMMAND_USAGE_MESSAGE,
    LABEL_WIDTH,
)
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult

logger = logging.getLogger(__name__)

# Index of the first argument token, after "settings <verb>"
ARGUMENT_INDEX = 2


class ISettingsHandler(ABC):
    """Interface for settings command handlers.

    Each handler implements one operation of the ``settings`` grammar.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The operation literal this handler implements."""

    @property
    def description(self) -> str:
        return f"settings {self.name}"

    @property
    def usage(self) -> str:
        return f"settings {self.name}"

    def accepts(self, match: GrammarMatch, command: Command) -> bool:
        """Check whether the matched command is one this handler owns.

        Args:
            match: The grammar match for the command
            command: The command itself

        Returns:
            True if the handler should run; False hands the line back to the host
        """
        return True

    @abstractmethod
    def handle(self, command: Command, context: ExecutionContext) -> DispatchResult:
        """Run the operation against ``context.store``.

        Never raises for storage or input problems; those become
        ``success=False`` results.
        """


class BaseSettingsHandler(ISettingsHandler, ABC):
    """Base implementation of a settings command handler.

    Converts the errors an operation raises into failed dispatch results.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def handle(self, command: Command, context: ExecutionContext) -> DispatchResult:
        try:
            return self.execute(command, context)
        except MalformedCommandError as e:
            logger.info("Rejected '%s': %s", command, e.message)
            context.emit(COMMAND_USAGE_MESSAGE.format(usage=self.usage))
            return self._failure(e)
        except SettingsConsoleError as e:
            logger.error("settings %s failed: %s", self.name, e.message)
            return self._failure(e)

    @abstractmethod
    def execute(self, command: Command, context: ExecutionContext) -> DispatchResult:
        """Perform the operation; may raise ``SettingsConsoleError``."""

    def require_key(self, command: Command) -> str:
        """Return the key token that follows the operation literal.

        Raises:
            MalformedCommandError: If the command has no (non-blank) key token
        """
        key = command.token(ARGUMENT_INDEX)
        if key is None or not key.strip():
            raise MalformedCommandError(
                COMMAND_MISSING_KEY_ERROR, command_name=self.name
            )
        return key

    @staticmethod
    def write_record(context: ExecutionContext, label: str, value: Any) -> None:
        """Emit one ``label value`` line with the label padded to LABEL_WIDTH."""
        context.emit(f"{label:<{LABEL_WIDTH}}{value}")

    def _failure(self, error: SettingsConsoleError) -> DispatchResult:
        return DispatchResult.failure(
            self.name,
            error.message,
            {
                "error": type(error).__name__,
                "message": error.message,
                "details": error.details,
            },
        )
