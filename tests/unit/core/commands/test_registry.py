import pytest
from src.core.commands.handlers.get_handler import GetSettingsHandler
from src.core.commands.handlers.set_handler import SetSettingHandler
from src.core.commands.registry import (
    CommandRegistry,
    command,
    settings_command_registry,
)


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry()


class TestCommandRegistry:
    def test_register_and_lookup(self, registry: CommandRegistry) -> None:
        registry.register("get", GetSettingsHandler)

        assert registry.get_command_handler("get") is GetSettingsHandler
        assert registry.get_command_handler("set") is None
        assert registry.get_all_commands() == {"get": GetSettingsHandler}

    def test_duplicate_name_rejected(self, registry: CommandRegistry) -> None:
        registry.register("get", GetSettingsHandler)

        with pytest.raises(ValueError):
            registry.register("get", SetSettingHandler)

    def test_empty_name_rejected(self, registry: CommandRegistry) -> None:
        with pytest.raises(ValueError):
            registry.register("", GetSettingsHandler)

    def test_decorator_targets_given_registry(self, registry: CommandRegistry) -> None:
        decorated = command("fetch", registry=registry)(GetSettingsHandler)

        assert decorated is GetSettingsHandler
        assert registry.get_command_handler("fetch") is GetSettingsHandler
        assert settings_command_registry.get_command_handler("fetch") is None

    def test_builtin_operations_are_registered(self) -> None:
        assert set(settings_command_registry.get_all_commands()) == {
            "set",
            "get",
            "delete",
            "show",
        }
