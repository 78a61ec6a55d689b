"""
Matches tokenized command lines against a grammar tree.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.commands.command import Command, normalize_token
from src.core.commands.grammar import SETTINGS_GRAMMAR, GrammarNode


@dataclass(frozen=True)
class GrammarMatch:
    """
    The deepest chain of grammar nodes a command walked down.

    Attributes:
        nodes: Matched nodes, root first.
        residual: The command's remaining tokens, verbatim.
    """

    nodes: tuple[GrammarNode, ...]
    residual: tuple[str, ...]

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(node.token for node in self.nodes)

    @property
    def node(self) -> GrammarNode:
        """The node the walk stopped at."""
        return self.nodes[-1]

    @property
    def verb_node(self) -> GrammarNode | None:
        return self.nodes[1] if len(self.nodes) > 1 else None

    @property
    def verb(self) -> str | None:
        """The operation literal directly below the root, if one matched."""
        verb_node = self.verb_node
        return verb_node.token if verb_node is not None else None


class GrammarMatcher:
    """Recursive-descent matcher over a single grammar root."""

    def __init__(self, root: GrammarNode = SETTINGS_GRAMMAR) -> None:
        self.root = root

    def match(self, command: Command) -> GrammarMatch | None:
        """
        Walk the grammar as far as the command's tokens allow.

        Args:
            command: The command to match.

        Returns:
            The match, or None when the first token is not the root literal.
        """
        first = command.token(0)
        if first is None or normalize_token(first) != self.root.token:
            return None
        return self._descend(command.tokens, 1, (self.root,))

    def _descend(
        self,
        tokens: tuple[str, ...],
        index: int,
        nodes: tuple[GrammarNode, ...],
    ) -> GrammarMatch:
        if index < len(tokens):
            child = nodes[-1].child(tokens[index])
            if child is not None:
                return self._descend(tokens, index + 1, nodes + (child,))
        return GrammarMatch(nodes=nodes, residual=tokens[index:])

    def owns(self, command: Command) -> bool:
        """True when the command names one of the root's operations."""
        match = self.match(command)
        return match is not None and match.verb is not None
