"""
Handler for ``settings show <mode>``.

Only the ``all`` mode is declared: it prints every stored setting, one record
per line, in the order the store yields them.
"""

from __future__ import annotations

import logging

from src.core.commands.command import Command, normalize_token
from src.core.commands.handlers.base_handler import BaseSettingsHandler
from src.core.commands.matcher import GrammarMatch
from src.core.commands.registry import command
from src.core.domain.command_context import ExecutionContext
from src.core.domain.command_results import DispatchResult

logger = logging.getLogger(__name__)


@command("show")
class ShowSettingsHandler(BaseSettingsHandler):
    """Prints stored settings."""

    def __init__(self) -> None:
        super().__init__("show")

    @property
    def description(self) -> str:
        return "Print every stored setting."

    @property
    def usage(self) -> str:
        return "settings show all"

    def accepts(self, match: GrammarMatch, command: Command) -> bool:
        # The mode is the line's last token and must be declared under "show"
        verb_node = match.verb_node
        last = command.last_token
        if verb_node is None or last is None or len(command) < 3:
            return False
        return verb_node.child(last) is not None

    def execute(self, command: Command, context: ExecutionContext) -> DispatchResult:
        mode = normalize_token(command.last_token or "")
        count = 0
        if mode == "all":
            for setting in context.store.list_all():
                self.write_record(context, setting.key, setting.value)
                count += 1
        logger.debug("Listed %d settings", count)
        return DispatchResult(
            success=True,
            name=self.name,
            payload={"mode": mode, "count": count},
        )
