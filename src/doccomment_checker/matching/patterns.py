"""Backward pattern matching over a TokenStream.

Patterns form a small closed tree of frozen dataclasses:

    Literal(kind)          exactly one token of ``kind``
    Sequence(children)     every child, consecutively, all-or-nothing
    Optional(inner)        ``inner`` if it matches, otherwise zero width
    Alternation(kinds)     exactly one token whose kind is in ``kinds``

Matching walks *backward* from an anchor position: a pattern anchored at
``position`` consumes ``position - 1``, ``position - 2`` and so on, and the
children of a Sequence are matched in reverse declaration order (the last
child sits nearest the anchor).

The engine backtracks. ``iter_backward`` yields every end position the
pattern can reach, in preference order: an Optional tries its inner pattern
before the zero-width fallback. ``match_backward`` keeps only the first.
Neither ever partially consumes a Sequence.

Example:
    >>> from doccomment_checker.scanning import tokenize, TokenKind
    >>> stream = tokenize("<?php /** Doc. */ static function f() {}")
    >>> pattern = Optional(Sequence((Literal(TokenKind.STATIC), Literal(TokenKind.WHITESPACE))))
    >>> match_backward(pattern, stream, 5)
    MatchResult(matched=True, position=3)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from ..scanning.tokens import TokenKind, TokenStream


@dataclass(frozen=True)
class Literal:
    kind: TokenKind


@dataclass(frozen=True)
class Sequence:
    children: tuple["Pattern", ...]


@dataclass(frozen=True)
class Optional:
    inner: "Pattern"


@dataclass(frozen=True)
class Alternation:
    kinds: frozenset[TokenKind]


Pattern = Union[Literal, Sequence, Optional, Alternation]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a backward match; ``position`` is unchanged on failure."""

    matched: bool
    position: int


def seq(*children: Union[Pattern, TokenKind]) -> Sequence:
    """Build a Sequence; bare TokenKinds are wrapped in Literal."""
    return Sequence(tuple(_coerce(child) for child in children))


def opt(*children: Union[Pattern, TokenKind]) -> Optional:
    """Build an Optional; several children form an atomic Sequence."""
    if len(children) == 1:
        return Optional(_coerce(children[0]))
    return Optional(seq(*children))


def one_of(kinds: Iterable[TokenKind]) -> Alternation:
    return Alternation(frozenset(kinds))


def _coerce(value: Union[Pattern, TokenKind]) -> Pattern:
    if isinstance(value, TokenKind):
        return Literal(value)
    return value


def iter_backward(pattern: Pattern, stream: TokenStream, position: int) -> Iterator[int]:
    """Yield every position ``pattern`` can end at, walking back from ``position``."""
    if isinstance(pattern, Literal):
        if stream.kind_at(position - 1) is pattern.kind:
            yield position - 1
    elif isinstance(pattern, Alternation):
        if stream.kind_at(position - 1) in pattern.kinds:
            yield position - 1
    elif isinstance(pattern, Optional):
        yield from iter_backward(pattern.inner, stream, position)
        yield position
    elif isinstance(pattern, Sequence):
        yield from _iter_sequence(pattern.children, len(pattern.children) - 1, stream, position)
    else:
        raise TypeError(f"Unknown pattern node: {pattern!r}")


def _iter_sequence(
    children: tuple[Pattern, ...], index: int, stream: TokenStream, position: int
) -> Iterator[int]:
    if index < 0:
        yield position
        return
    for reached in iter_backward(children[index], stream, position):
        yield from _iter_sequence(children, index - 1, stream, reached)


def match_backward(pattern: Pattern, stream: TokenStream, position: int) -> MatchResult:
    """Match ``pattern`` backward from ``position``, keeping the preferred result."""
    for reached in iter_backward(pattern, stream, position):
        return MatchResult(True, reached)
    return MatchResult(False, position)


def skip_whitespace_backward(stream: TokenStream, position: int) -> int:
    """Move the anchor back over a run of whitespace tokens."""
    while stream.kind_at(position - 1) is TokenKind.WHITESPACE:
        position -= 1
    return position


def skip_whitespace_forward(stream: TokenStream, index: int) -> int:
    """Return the first index after ``index`` that is not whitespace."""
    index += 1
    while stream.kind_at(index) is TokenKind.WHITESPACE:
        index += 1
    return index
