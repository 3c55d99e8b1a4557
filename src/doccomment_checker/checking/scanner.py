"""Single forward pass over a token stream, dispatching to attachment rules.

The scanner's state is an immutable ScanState; each step consumes the
token under the cursor and returns the next state. Nesting is tracked two
ways:

- a stack of open class/interface contexts, each with its own brace depth;
- a function nesting counter (-1 outside any function body) so that
  parameters and local variables are never mistaken for class properties.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..matching.patterns import skip_whitespace_backward, skip_whitespace_forward
from ..scanning.tokens import Token, TokenKind, TokenStream
from .models import EntityContext, EntityKind, ScanState
from .rules import AttachmentRules, find_file_comment

logger = logging.getLogger(__name__)

ANONYMOUS_CLASS = "class@anonymous"
CLOSURE = "{closure}"

_CONTEXT_KINDS = {
    TokenKind.CLASS: EntityKind.CLASS,
    TokenKind.INTERFACE: EntityKind.INTERFACE,
}


class EntityScanner:
    """Checks one file's token stream for missing doc comments.

    Args:
        stream: Tokens of the file
        file: Identifier used in findings (usually the path)
        rules: Attachment rules bound to the run's config, counters and sink
        check_define_constants: Also check ``define('NAME', ...)`` calls
    """

    def __init__(
        self,
        stream: TokenStream,
        file: str,
        rules: AttachmentRules,
        check_define_constants: bool = False,
    ):
        self.stream = stream
        self.file = file
        self.rules = rules
        self.check_define_constants = check_define_constants
        self._handlers: dict[TokenKind, Callable[[ScanState, Token], ScanState]] = {
            TokenKind.CLASS: self._on_context_keyword,
            TokenKind.INTERFACE: self._on_context_keyword,
            TokenKind.FUNCTION: self._on_function,
            TokenKind.VARIABLE: self._on_variable,
            TokenKind.CONST: self._on_const,
            TokenKind.IDENTIFIER: self._on_identifier,
            TokenKind.DOC_COMMENT: self._on_doc_comment,
            TokenKind.OPEN_BRACE: self._on_open_brace,
            TokenKind.CLOSE_BRACE: self._on_close_brace,
        }

    def scan(self) -> ScanState:
        """Run the whole pass and return the final state."""
        state = self._start()
        length = len(self.stream)

        while state.cursor < length:
            before = state.cursor
            state = self.step(state)
            state = self._release_file_comment(state)
            if state.cursor <= before:
                state = replace(state, cursor=before + 1)

        if state.file_doc_comment >= 0:
            self.rules.counters.record_found(EntityKind.FILE)
        return state

    def step(self, state: ScanState) -> ScanState:
        """Process the token under the cursor."""
        token = self.stream.at(state.cursor)
        if token is None:
            return replace(state, cursor=state.cursor + 1)
        handler = self._handlers.get(token.kind)
        if handler is None:
            return replace(state, cursor=state.cursor + 1)
        return handler(state, token)

    # -- file level --

    def _start(self) -> ScanState:
        found = find_file_comment(self.stream)
        if found.doc_index is None:
            self.rules.file_missing(self.file, found.line)
            return ScanState(cursor=found.start)
        return ScanState(cursor=found.doc_index + 1, file_doc_comment=found.doc_index)

    def _release_file_comment(self, state: ScanState) -> ScanState:
        # The leading comment was claimed by the first entity instead of the file.
        if state.file_doc_comment >= 0 and state.last_doc_comment == state.file_doc_comment:
            self.rules.file_missing(self.file, 1)
            return replace(state, file_doc_comment=-1)
        return state

    # -- declarations --

    def _on_context_keyword(self, state: ScanState, token: Token) -> ScanState:
        kind = _CONTEXT_KINDS[token.kind]
        name_index = skip_whitespace_forward(self.stream, state.cursor)
        name_token = self.stream.at(name_index)
        if name_token is not None and name_token.kind is TokenKind.IDENTIFIER:
            name, line = name_token.text, name_token.line
        else:
            name, line, name_index = ANONYMOUS_CLASS, token.line, state.cursor + 1

        doc = self.rules.check(kind, self.stream, state.cursor, self.file, name, line)
        context = EntityContext(kind=kind, name=name, line=line)
        if state.contexts and state.contexts[-1].depth == 0:
            logger.debug("%s:%d: %s `%s` replaces unopened context", self.file, line, kind.value, name)
            contexts = state.contexts[:-1] + (context,)
        else:
            contexts = state.contexts + (context,)
        return self._claimed(replace(state, cursor=name_index, contexts=contexts), doc)

    def _on_function(self, state: ScanState, token: Token) -> ScanState:
        # `use function Foo\bar;` imports a function, it does not declare one.
        previous = self.stream.at(skip_whitespace_backward(self.stream, state.cursor) - 1)
        if previous is not None and previous.kind is TokenKind.IDENTIFIER and previous.text.lower() == "use":
            return replace(state, cursor=state.cursor + 1)

        name_index = skip_whitespace_forward(self.stream, state.cursor)
        name_token = self.stream.at(name_index)
        if name_token is not None and name_token.kind is TokenKind.OPERATOR and name_token.text == "&":
            name_index = skip_whitespace_forward(self.stream, name_index)
            name_token = self.stream.at(name_index)
        if name_token is not None and name_token.kind is TokenKind.IDENTIFIER:
            name, line = name_token.text, name_token.line
        else:
            name, line = CLOSURE, token.line

        doc = self.rules.check(
            EntityKind.FUNCTION,
            self.stream,
            state.cursor,
            self.file,
            name,
            line,
            enclosing=self._enclosing_name(state),
        )

        # A function declared inside another body (closure) keeps the outer count.
        outer = state.function_nesting
        nesting = outer if outer > 0 else 0

        # Skip the parameter list so its variables are never seen as properties.
        body = self._find_body(state.cursor)
        if self.stream.kind_at(body) is TokenKind.SEMICOLON and nesting == 0:
            nesting = -1
        return self._claimed(replace(state, cursor=body, function_nesting=nesting), doc)

    def _on_variable(self, state: ScanState, token: Token) -> ScanState:
        if state.contexts and state.function_nesting <= 0:
            doc = self.rules.check(
                EntityKind.CLASS_VARIABLE,
                self.stream,
                state.cursor,
                self.file,
                token.text,
                token.line,
                enclosing=self._enclosing_name(state),
            )
            state = self._claimed(state, doc)
        return replace(state, cursor=state.cursor + 1)

    def _on_const(self, state: ScanState, token: Token) -> ScanState:
        if not state.contexts:
            return replace(state, cursor=state.cursor + 1)

        name_token = self._constant_name(state.cursor)
        name = name_token.text if name_token is not None else ""
        line = name_token.line if name_token is not None else token.line
        doc = self.rules.check(
            EntityKind.CLASS_CONSTANT,
            self.stream,
            state.cursor,
            self.file,
            name,
            line,
            enclosing=self._enclosing_name(state),
        )
        return self._claimed(replace(state, cursor=state.cursor + 1), doc)

    def _on_identifier(self, state: ScanState, token: Token) -> ScanState:
        cursor = state.cursor + 1
        if (
            not self.check_define_constants
            or token.text.lower() != "define"
            or state.contexts
            or state.in_function_body
        ):
            return replace(state, cursor=cursor)

        paren = skip_whitespace_forward(self.stream, state.cursor)
        if self.stream.kind_at(paren) is not TokenKind.OPEN_PAREN:
            return replace(state, cursor=cursor)

        argument = self.stream.at(skip_whitespace_forward(self.stream, paren))
        if argument is not None and argument.kind is TokenKind.STRING:
            name = argument.text.strip("'\"")
        else:
            name = argument.text if argument is not None else ""
        doc = self.rules.check(EntityKind.CONSTANT, self.stream, state.cursor, self.file, name, token.line)
        return self._claimed(replace(state, cursor=cursor), doc)

    def _on_doc_comment(self, state: ScanState, token: Token) -> ScanState:
        return replace(state, cursor=state.cursor + 1, last_doc_comment=state.cursor)

    # -- braces --

    def _on_open_brace(self, state: ScanState, token: Token) -> ScanState:
        contexts = state.contexts
        if contexts:
            top = contexts[-1]
            contexts = contexts[:-1] + (replace(top, depth=top.depth + 1),)
        nesting = state.function_nesting + 1 if state.function_nesting >= 0 else state.function_nesting
        return replace(state, cursor=state.cursor + 1, contexts=contexts, function_nesting=nesting)

    def _on_close_brace(self, state: ScanState, token: Token) -> ScanState:
        contexts = state.contexts
        if contexts:
            top = contexts[-1]
            if top.depth <= 1:
                contexts = contexts[:-1]
            else:
                contexts = contexts[:-1] + (replace(top, depth=top.depth - 1),)
        # Closing the outermost function body leaves every function.
        nesting = state.function_nesting - 1 if state.function_nesting > 1 else -1
        return replace(state, cursor=state.cursor + 1, contexts=contexts, function_nesting=nesting)

    # -- helpers --

    @staticmethod
    def _claimed(state: ScanState, doc_index: Optional[int]) -> ScanState:
        if doc_index is None:
            return state
        return replace(state, last_doc_comment=doc_index)

    @staticmethod
    def _enclosing_name(state: ScanState) -> Optional[str]:
        context = state.context
        return context.name if context is not None else None

    def _find_body(self, index: int) -> int:
        """Index of the function's body ``{`` (or ``;`` when it has none), or EOF."""
        depth = 0
        index += 1
        while index < len(self.stream):
            kind = self.stream.kind_at(index)
            if kind is TokenKind.OPEN_PAREN:
                depth += 1
            elif kind is TokenKind.CLOSE_PAREN:
                depth = max(depth - 1, 0)
            elif depth == 0 and kind in (TokenKind.OPEN_BRACE, TokenKind.SEMICOLON):
                return index
            index += 1
        return index

    def _constant_name(self, index: int) -> Optional[Token]:
        """Last identifier before ``=`` (typed constants put the type first)."""
        name: Optional[Token] = None
        index += 1
        while index < len(self.stream):
            token = self.stream.at(index)
            if token is None or token.kind in (TokenKind.SEMICOLON, TokenKind.OPERATOR):
                break
            if token.kind is TokenKind.IDENTIFIER:
                name = token
            elif token.kind is not TokenKind.WHITESPACE:
                break
            index += 1
        return name
