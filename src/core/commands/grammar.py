"""
Declarative grammar for the settings subsystem.

A grammar node is either a leaf (an operation with no further fixed tokens)
or a branch holding child literals. The host merges the mapping form returned
by :func:`describe` into its own grammar for help and completion.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.core.commands.command import normalize_token
from src.core.common.exceptions import GrammarError

logger = logging.getLogger(__name__)

GrammarMapping = Mapping[str, Any]

SETTINGS_GRAMMAR_SPEC: dict[str, Any] = {
    "settings": {
        "delete": None,
        "get": None,
        "set": None,
        "show": {"all": None},
    }
}


@dataclass(frozen=True)
class GrammarNode:
    """A literal token and the literals that may follow it."""

    token: str
    children: tuple[GrammarNode, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def child(self, token: str) -> GrammarNode | None:
        """Return the child whose literal matches ``token``, if any."""
        wanted = normalize_token(token)
        for node in self.children:
            if node.token == wanted:
                return node
        return None

    def child_tokens(self) -> tuple[str, ...]:
        return tuple(node.token for node in self.children)

    def to_mapping(self) -> dict[str, Any] | None:
        """Mapping form of the children; None for a leaf."""
        if self.is_leaf:
            return None
        return {node.token: node.to_mapping() for node in self.children}

    @classmethod
    def from_mapping(cls, token: str, spec: GrammarMapping | None) -> GrammarNode:
        """Build a node from the ``{literal: None | {...}}`` mapping form.

        Raises:
            GrammarError: On empty literals, literals that collide once
                normalized, or children that are neither None nor a mapping
        """
        literal = normalize_token(token)
        if not literal or len(literal.split()) != 1:
            raise GrammarError("Grammar literals must be single tokens", token=token)
        if spec is None:
            return cls(literal)
        if not isinstance(spec, Mapping):
            raise GrammarError(
                f"Children of '{literal}' must be a mapping or None",
                token=token,
                details={"type": type(spec).__name__},
            )

        children: list[GrammarNode] = []
        seen: set[str] = set()
        for child_token, child_spec in spec.items():
            node = cls.from_mapping(child_token, child_spec)
            if node.token in seen:
                raise GrammarError(
                    f"Duplicate literal '{node.token}' under '{literal}'",
                    token=child_token,
                )
            seen.add(node.token)
            children.append(node)
        return cls(literal, tuple(children))


def build_grammar(spec: GrammarMapping) -> tuple[GrammarNode, ...]:
    """Build the root nodes of a grammar mapping."""
    return GrammarNode.from_mapping("root", spec).children


SETTINGS_GRAMMAR: GrammarNode = build_grammar(SETTINGS_GRAMMAR_SPEC)[0]


def describe() -> dict[str, Any]:
    """Return the settings grammar in mapping form.

    The result is a fresh copy; callers may merge or modify it freely.
    """
    return {SETTINGS_GRAMMAR.token: SETTINGS_GRAMMAR.to_mapping()}


def merge_grammars(*grammars: GrammarMapping) -> dict[str, Any]:
    """Deep-merge grammar mappings contributed by several subsystems.

    A literal that is a leaf in one grammar and a branch in another ends up as
    the branch.
    """
    merged: dict[str, Any] = {}
    for grammar in grammars:
        _merge_into(merged, grammar)
    return merged


def _merge_into(target: dict[str, Any], source: GrammarMapping) -> None:
    for token, children in source.items():
        if children is None:
            target.setdefault(token, None)
        elif isinstance(target.get(token), dict):
            _merge_into(target[token], children)
        else:
            target[token] = copy.deepcopy(dict(children))


def render_grammar(grammar: GrammarMapping, indent: str = "  ") -> list[str]:
    """Render a grammar mapping as indented lines, one literal per line."""
    lines: list[str] = []

    def _walk(node: GrammarMapping, depth: int) -> None:
        for token in sorted(node):
            lines.append(f"{indent * depth}{token}")
            children = node[token]
            if children:
                _walk(children, depth + 1)

    _walk(grammar, 0)
    return lines
