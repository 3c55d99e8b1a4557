"""Token kinds, the Token dataclass and the read-only TokenStream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, Sequence


class TokenKind(Enum):
    """Every distinct token kind the PHP lexer can produce."""

    # Regions outside PHP code
    INLINE_HTML = auto()
    OPEN_TAG = auto()  # <?php or <?=
    CLOSE_TAG = auto()  # ?>

    # Comments & layout
    DOC_COMMENT = auto()  # /** ... */
    COMMENT = auto()
    WHITESPACE = auto()

    # Structure
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    SEMICOLON = auto()

    # Declarations
    CLASS = auto()
    INTERFACE = auto()
    FUNCTION = auto()
    CONST = auto()
    VARIABLE = auto()  # $name
    IDENTIFIER = auto()

    # Modifiers
    ABSTRACT = auto()
    STATIC = auto()
    PUBLIC = auto()
    PRIVATE = auto()
    PROTECTED = auto()

    # Everything else
    STRING = auto()
    NUMBER = auto()
    OPERATOR = auto()
    OTHER = auto()


VISIBILITY_KINDS = frozenset({TokenKind.PUBLIC, TokenKind.PRIVATE, TokenKind.PROTECTED})

# Case-insensitive keyword text -> kind. Keywords not listed here are identifiers.
KEYWORDS = {
    "class": TokenKind.CLASS,
    "interface": TokenKind.INTERFACE,
    "function": TokenKind.FUNCTION,
    "const": TokenKind.CONST,
    "abstract": TokenKind.ABSTRACT,
    "static": TokenKind.STATIC,
    "public": TokenKind.PUBLIC,
    "private": TokenKind.PRIVATE,
    "protected": TokenKind.PROTECTED,
}


@dataclass(frozen=True)
class Token:
    """A single lexer token: kind, literal source text and 1-based start line."""

    kind: TokenKind
    text: str
    line: int


class TokenStream:
    """Immutable, index-addressable sequence of tokens for one file.

    Probing outside ``[0, len)`` returns ``None`` instead of raising, so
    backward and forward scans can treat the stream edges as "no match".
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Sequence[Token]):
        self._tokens: tuple[Token, ...] = tuple(tokens)

    def at(self, index: int) -> Optional[Token]:
        """Return the token at ``index`` or ``None`` when out of bounds."""
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def kind_at(self, index: int) -> Optional[TokenKind]:
        token = self.at(index)
        return token.kind if token is not None else None

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({len(self._tokens)} tokens)"
