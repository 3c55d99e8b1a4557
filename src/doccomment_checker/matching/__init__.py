"""Backtracking backward pattern engine."""

from .patterns import (
    Alternation,
    Literal,
    MatchResult,
    Optional,
    Pattern,
    Sequence,
    iter_backward,
    match_backward,
    one_of,
    opt,
    seq,
    skip_whitespace_backward,
    skip_whitespace_forward,
)

__all__ = [
    "Alternation",
    "Literal",
    "MatchResult",
    "Optional",
    "Pattern",
    "Sequence",
    "iter_backward",
    "match_backward",
    "one_of",
    "opt",
    "seq",
    "skip_whitespace_backward",
    "skip_whitespace_forward",
]
