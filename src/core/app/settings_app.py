"""
Settings management application.

Exposes the settings subsystem to a host command shell through three hook
callbacks: grammar loading, start-up announcement, and command processing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from src.core.commands.command import Command
from src.core.commands.dispatcher import SettingsCommandDispatcher
from src.core.commands.grammar import describe
from src.core.constants import APP_LOADED_MESSAGE, APP_NAME
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult

logger = logging.getLogger(__name__)

# Verbosity above which the app announces itself on start-up
ANNOUNCE_VERBOSITY = 4


@dataclass(frozen=True)
class HookBinding:
    """A host action, the app method that answers it, and its priority."""

    action: str
    method: str
    priority: int


class SettingsApp:
    """The settings subsystem as a host plugin."""

    app_name = APP_NAME
    can_reload = False

    hooks: tuple[HookBinding, ...] = (
        HookBinding("cli-load-grammar", "load_grammar", 50),
        HookBinding("cli-init", "declare_myself", 20),
        HookBinding("cli-command", "process_command", 50),
    )

    def __init__(self, dispatcher: SettingsCommandDispatcher | None = None) -> None:
        self.dispatcher = dispatcher or SettingsCommandDispatcher()
        self.loaded = False

    def load_grammar(self) -> dict[str, Any]:
        """Contribute this app's grammar to the host grammar."""
        self.loaded = True
        return {"grammar": describe(), "success": True}

    def declare_myself(self, context: ExecutionContext) -> dict[str, Any]:
        """Announce the app at high verbosity once its grammar is loaded."""
        if context.verbosity > ANNOUNCE_VERBOSITY and self.loaded:
            context.emit(APP_LOADED_MESSAGE)
        return {"success": True}

    def process_command(
        self, command: Command, context: ExecutionContext
    ) -> DispatchResult:
        return self.dispatcher.dispatch(command, context)

    def callback_for(self, action: str) -> Any:
        """Return the bound method registered for a host action, or None."""
        for hook in self.hooks:
            if hook.action == action:
                return getattr(self, hook.method)
        return None
