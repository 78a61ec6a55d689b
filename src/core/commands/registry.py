"""
A decorator-based command registry.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.commands.handlers.base_handler import ISettingsHandler


class CommandRegistry:
    """Maps operation literals to the handler classes that implement them."""

    def __init__(self) -> None:
        self._registry: dict[str, type[ISettingsHandler]] = {}

    def register(self, name: str, handler_class: type[ISettingsHandler]) -> None:
        """
        Register a handler class under an operation literal.

        Raises:
            ValueError: If the name is empty or already registered
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Command name must be a non-empty string.")
        if name in self._registry:
            raise ValueError(f"Command '{name}' is already registered.")
        self._registry[name] = handler_class

    def get_command_handler(self, name: str) -> type[ISettingsHandler] | None:
        return self._registry.get(name)

    def get_all_commands(self) -> dict[str, type[ISettingsHandler]]:
        return self._registry.copy()


# Global instance of the registry
settings_command_registry = CommandRegistry()


def command(
    name: str, registry: CommandRegistry | None = None
) -> Callable[[type[ISettingsHandler]], type[ISettingsHandler]]:
    """
    A decorator to register a command handler.

    Args:
        name: The operation literal the handler implements.
        registry: Registry to add to; the global registry by default.

    Returns:
        A decorator that registers the command handler.
    """

    def decorator(cls: type[ISettingsHandler]) -> type[ISettingsHandler]:
        (registry or settings_command_registry).register(name, cls)
        return cls

    return decorator
