import pytest
from src.core.commands.command import Command
from src.core.commands.grammar import build_grammar
from src.core.commands.matcher import GrammarMatcher


@pytest.fixture
def matcher() -> GrammarMatcher:
    return GrammarMatcher()


class TestGrammarMatcher:
    def test_foreign_command_does_not_match(self, matcher: GrammarMatcher) -> None:
        assert matcher.match(Command(["other", "command"])) is None
        assert matcher.match(Command([])) is None

    def test_root_only(self, matcher: GrammarMatcher) -> None:
        match = matcher.match(Command(["settings"]))

        assert match is not None
        assert match.path == ("settings",)
        assert match.verb is None
        assert not matcher.owns(Command(["settings"]))

    def test_unknown_operation(self, matcher: GrammarMatcher) -> None:
        match = matcher.match(Command(["settings", "frobnicate", "x"]))

        assert match is not None
        assert match.verb is None
        assert match.residual == ("frobnicate", "x")

    def test_verb_and_residual(self, matcher: GrammarMatcher) -> None:
        match = matcher.match(
            Command(["settings", "set", "greeting", "hello", "world"])
        )

        assert match is not None
        assert match.verb == "set"
        assert match.residual == ("greeting", "hello", "world")

    def test_descends_into_show_modes(self, matcher: GrammarMatcher) -> None:
        match = matcher.match(Command(["Settings", "SHOW", "All"]))

        assert match is not None
        assert match.path == ("settings", "show", "all")
        assert match.node.is_leaf
        assert match.residual == ()

    def test_residual_keeps_token_case(self, matcher: GrammarMatcher) -> None:
        match = matcher.match(Command(["settings", "get", "MixedCase"]))

        assert match is not None
        assert match.residual == ("MixedCase",)

    def test_owns(self, matcher: GrammarMatcher) -> None:
        assert matcher.owns(Command(["settings", "show", "all"]))
        assert matcher.owns(Command(["settings", "delete"]))
        assert not matcher.owns(Command(["other", "command"]))

    def test_custom_root(self) -> None:
        root = build_grammar({"profile": {"load": None}})[0]
        matcher = GrammarMatcher(root)

        assert matcher.owns(Command(["profile", "load", "dev"]))
        assert not matcher.owns(Command(["settings", "get", "a"]))
