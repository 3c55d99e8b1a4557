"""Attachment rules: is an entity immediately preceded by a doc comment?

Each entity kind has a modifier pattern describing the tokens that may sit
between its doc comment and its defining keyword (or, for class variables,
its name). A rule matches that pattern backward from the keyword, skips any
whitespace, and expects a DOC_COMMENT there:

    Class           [abstract ws] class Name
    Interface       interface Name
    Function        [static ws] [ws] [visibility] [ws] [static ws] function name
    Class variable  [static ws] [ws] [visibility] [ws] [static ws] $name
    Class constant  const NAME
    Constant        define('NAME', ...)

Modifier candidates are tried in preference order, so ``static public`` and
``public static`` are both accepted by the same pattern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from ..matching.patterns import (
    Pattern,
    iter_backward,
    one_of,
    opt,
    seq,
    skip_whitespace_backward,
)
from ..scanning.tokens import VISIBILITY_KINDS, TokenKind, TokenStream
from .models import Counters, EntityKind

if TYPE_CHECKING:
    from ..config import CheckerConfig

_WS = TokenKind.WHITESPACE

_MEMBER_MODIFIERS: Pattern = seq(
    opt(TokenKind.STATIC, _WS),
    opt(_WS),
    opt(one_of(VISIBILITY_KINDS)),
    opt(_WS),
    opt(TokenKind.STATIC, _WS),
)

ATTACHMENT_PATTERNS: dict[EntityKind, Optional[Pattern]] = {
    EntityKind.CLASS: opt(TokenKind.ABSTRACT, _WS),
    EntityKind.INTERFACE: None,
    EntityKind.FUNCTION: _MEMBER_MODIFIERS,
    EntityKind.CLASS_VARIABLE: _MEMBER_MODIFIERS,
    EntityKind.CLASS_CONSTANT: None,
    EntityKind.CONSTANT: None,
}

# Leading regions skipped, in order, before the file's own doc comment.
_FILE_PROLOG = (TokenKind.INLINE_HTML, TokenKind.OPEN_TAG)


def find_doc_comment(kind: EntityKind, stream: TokenStream, anchor: int) -> Optional[int]:
    """Return the index of the doc comment attached to the entity at ``anchor``.

    ``anchor`` is the index of the entity's keyword or name token. Returns
    ``None`` when no arrangement of the kind's modifiers leads to a doc comment.
    """
    pattern = ATTACHMENT_PATTERNS[kind]
    candidates = iter_backward(pattern, stream, anchor) if pattern is not None else iter([anchor])
    for position in candidates:
        position = skip_whitespace_backward(stream, position)
        if stream.kind_at(position - 1) is TokenKind.DOC_COMMENT:
            return position - 1
    return None


@dataclass(frozen=True)
class FileComment:
    """Where the file-level doc comment is (or should have been)."""

    start: int  # first index after the prolog
    doc_index: Optional[int]
    line: int  # line reported when the comment is missing


def find_file_comment(stream: TokenStream) -> FileComment:
    """Skip the leading inline HTML and open tag; the next token must be a doc comment."""
    index = 0
    line = 1
    for kind in _FILE_PROLOG:
        token = stream.at(index)
        if token is not None and token.kind is kind:
            line = token.line
            index += 1
    doc_index = index if stream.kind_at(index) is TokenKind.DOC_COMMENT else None
    return FileComment(start=index, doc_index=doc_index, line=line)


def missing_message(kind: EntityKind, name: str = "", enclosing: Optional[str] = None) -> str:
    qualified = f"{enclosing}::{name}" if enclosing else name
    if kind is EntityKind.FILE:
        return "Missing file level doc-comment"
    if kind is EntityKind.CLASS_CONSTANT:
        return f"Missing doc-comment for class level constant `{qualified}`"
    return f"Missing doc-comment for {kind.label.lower()} `{qualified}`"


class AttachmentRules:
    """Applies attachment outcomes to the run counters and the reporting sink.

    Counters are always updated; the sink is only called when the entity
    kind's report flag is enabled.
    """

    def __init__(
        self,
        config: "CheckerConfig",
        counters: Counters,
        report: Callable[[str, int, str], None],
    ):
        self.config = config
        self.counters = counters
        self._report = report

    def check(
        self,
        kind: EntityKind,
        stream: TokenStream,
        anchor: int,
        file: str,
        name: str,
        line: int,
        enclosing: Optional[str] = None,
    ) -> Optional[int]:
        """Run the rule for ``kind``; return the claimed doc comment index, if any."""
        doc_index = find_doc_comment(kind, stream, anchor)
        if doc_index is None:
            self.missing(kind, file, line, missing_message(kind, name, enclosing))
        else:
            self.counters.record_found(kind)
        return doc_index

    def missing(self, kind: EntityKind, file: str, line: int, message: str) -> None:
        self.counters.record_missing(kind)
        if self.config.report_enabled(kind):
            self._report(file, line, message)

    def file_missing(self, file: str, line: int) -> None:
        self.missing(EntityKind.FILE, file, line, missing_message(EntityKind.FILE))

