"""
Core data structures for the command system.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


def normalize_token(token: str) -> str:
    """Canonical form used when comparing a token against grammar literals."""
    return token.strip().casefold()


@dataclass(frozen=True)
class Command:
    """
    One tokenized command line as produced by the host's tokenizer.

    Tokens are kept verbatim; only grammar literal comparisons normalize them.
    The command is never modified, slicing returns new tuples.

    Attributes:
        tokens: The ordered tokens of the line.
    """

    tokens: tuple[str, ...]

    def __init__(self, tokens: Sequence[str]) -> None:
        object.__setattr__(self, "tokens", tuple(tokens))

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def last_token(self) -> str | None:
        return self.tokens[-1] if self.tokens else None

    def token(self, index: int) -> str | None:
        """Return the token at ``index`` or None when the line is shorter."""
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def startswith(self, prefix: str | Sequence[str]) -> bool:
        """Check whether the leading tokens equal ``prefix`` literal by literal.

        ``prefix`` is either a sequence of literals or a whitespace separated
        string such as ``"settings show"``.
        """
        literals = prefix.split() if isinstance(prefix, str) else list(prefix)
        if len(literals) > len(self.tokens):
            return False
        return all(
            normalize_token(token) == normalize_token(literal)
            for token, literal in zip(self.tokens, literals)
        )

    def slice(self, start: int) -> tuple[str, ...]:
        return self.tokens[start:]

    def __str__(self) -> str:
        return " ".join(self.tokens)
