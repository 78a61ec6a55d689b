"""
Routes tokenized command lines owned by the settings grammar to the handler
registered for their operation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import src.core.commands.handlers  # noqa: F401  (registers the handlers)
from src.core.commands.command import Command
from src.core.commands.handlers.base_handler import ISettingsHandler
from src.core.commands.matcher import GrammarMatcher
from src.core.commands.registry import CommandRegistry, settings_command_registry
from src.core.common.logging_utils import LogContext, get_logger
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult

logger = logging.getLogger(__name__)
events = get_logger(__name__)


class SettingsCommandDispatcher:
    """
    Decides whether a command line belongs to the settings subsystem and, if
    so, runs the handler for the operation it names.

    The dispatcher keeps no per-command state; every call is a complete
    request/response cycle against the store in the supplied context.
    """

    def __init__(
        self,
        matcher: GrammarMatcher | None = None,
        registry: CommandRegistry | None = None,
    ) -> None:
        """
        Initializes the dispatcher.

        Args:
            matcher: Grammar matcher; defaults to the settings grammar.
            registry: Handler registry; defaults to the global registry.
        """
        self.matcher = matcher or GrammarMatcher()
        self.registry = registry or settings_command_registry

    def resolve(self, command: Command) -> ISettingsHandler | None:
        """Return the handler that owns ``command``, or None."""
        match = self.matcher.match(command)
        if match is None or match.verb is None:
            return None

        handler_class = self.registry.get_command_handler(match.verb)
        if handler_class is None:
            logger.warning(f"No handler registered for 'settings {match.verb}'.")
            return None

        handler = handler_class()
        if not handler.accepts(match, command):
            return None
        return handler

    def dispatch(
        self, command: Command | Sequence[str], context: ExecutionContext
    ) -> DispatchResult:
        """
        Offer one tokenized command line to the settings subsystem.

        Args:
            command: The command, or its tokens.
            context: Store, verbosity and output sink for this invocation.

        Returns:
            ``DispatchResult.not_handled()`` when the line is not ours,
            otherwise the handler's result.
        """
        if not isinstance(command, Command):
            command = Command(command)

        handler = self.resolve(command)
        if handler is None:
            return DispatchResult.not_handled()

        with LogContext(events, command=handler.name, tokens=len(command)) as log:
            log.debug("settings command dispatched")
            result = handler.handle(command, context)
            log.debug("settings command finished", success=result.success)
        return result
