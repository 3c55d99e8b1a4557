"""Regex-based PHP lexer.

Turns raw PHP source into a TokenStream. It only distinguishes what the
doc-comment checker needs: doc comments vs. ordinary comments, whitespace,
braces, the declaration keywords and their modifiers. Everything else is
lumped into coarse STRING / NUMBER / OPERATOR / OTHER tokens.

The lexer never raises on malformed input: unterminated comments and strings
simply run to the end of the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .tokens import KEYWORDS, Token, TokenKind, TokenStream

# <?php must be followed by whitespace (which belongs to the tag) or EOF.
_OPEN_TAG = re.compile(r"<\?(?:php(?:\r\n|[ \t\r\n]|\Z)|=)", re.IGNORECASE)

_HEREDOC = (
    r"<<<[ \t]*(?P<quote>[\"']?)(?P<label>[^\W\d]\w*)(?P=quote)\r?\n"
    r"(?:[\s\S]*?\n)?[ \t]*(?P=label)\b"
)

_NUMBER = (
    r"0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+"
    r"|\d[\d_]*(?:\.[\d_]*)?(?:[eE][+-]?\d+)?"
    r"|\.\d[\d_]*(?:[eE][+-]?\d+)?"
)

_OPERATOR = (
    r"#\[|\?->|->|::|=>|\.\.\.|\?\?=|\?\?|<=>|===|!==|==|!=|<>|<=|>=|&&|\|\||\+\+|--"
    r"|\*\*=?|<<=?|>>=?|[-+*/%.&|^]="
    r"|[-+*/%=!<>&|^.~?:@,\[\]\\]"
)

# Order matters: the first rule that matches at the current offset wins.
_PHP_RULES: list[tuple[TokenKind, re.Pattern[str]]] = [
    (TokenKind.CLOSE_TAG, re.compile(r"\?>(?:\r\n|\n)?")),
    (TokenKind.WHITESPACE, re.compile(r"\s+")),
    (TokenKind.COMMENT, re.compile(r"/\*\*/")),
    (TokenKind.DOC_COMMENT, re.compile(r"/\*\*(?=\s)[\s\S]*?(?:\*/|\Z)")),
    (TokenKind.COMMENT, re.compile(r"/\*[\s\S]*?(?:\*/|\Z)")),
    (TokenKind.COMMENT, re.compile(r"(?://|#(?!\[))(?:[^\r\n?]|\?(?!>))*")),
    (TokenKind.STRING, re.compile(_HEREDOC)),
    (TokenKind.STRING, re.compile(r"'(?:[^'\\]|\\[\s\S])*(?:'|\Z)")),
    (TokenKind.STRING, re.compile(r'"(?:[^"\\]|\\[\s\S])*(?:"|\Z)')),
    (TokenKind.STRING, re.compile(r"`(?:[^`\\]|\\[\s\S])*(?:`|\Z)")),
    (TokenKind.VARIABLE, re.compile(r"\$[^\W\d]\w*")),
    (TokenKind.IDENTIFIER, re.compile(r"[^\W\d]\w*")),
    (TokenKind.NUMBER, re.compile(_NUMBER)),
    (TokenKind.OPEN_BRACE, re.compile(r"\{")),
    (TokenKind.CLOSE_BRACE, re.compile(r"\}")),
    (TokenKind.OPEN_PAREN, re.compile(r"\(")),
    (TokenKind.CLOSE_PAREN, re.compile(r"\)")),
    (TokenKind.SEMICOLON, re.compile(r";")),
    (TokenKind.OPERATOR, re.compile(_OPERATOR)),
    (TokenKind.OTHER, re.compile(r"[\s\S]")),
]

# After these operators a keyword is a member or constant name: $a->class, Foo::class
_MEMBER_ACCESS = frozenset({"->", "?->", "::"})

_TRIVIA = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT, TokenKind.DOC_COMMENT})


@dataclass
class PhpLexer:
    """Tokenizer for PHP source files."""

    def tokenize(self, source: str) -> TokenStream:
        """Tokenize a whole file into a TokenStream."""
        return TokenStream(list(self.iter_tokens(source)))

    def iter_tokens(self, source: str) -> Iterator[Token]:
        """Yield tokens in source order, tracking the 1-based line of each."""
        pos = 0
        line = 1
        in_php = False
        previous: Optional[Token] = None
        length = len(source)

        while pos < length:
            if not in_php:
                match = _OPEN_TAG.search(source, pos)
                end = match.start() if match else length
                if end > pos:
                    text = source[pos:end]
                    yield Token(TokenKind.INLINE_HTML, text, line)
                    line += text.count("\n")
                    pos = end
                if match:
                    text = match.group()
                    yield Token(TokenKind.OPEN_TAG, text, line)
                    line += text.count("\n")
                    pos = match.end()
                    in_php = True
                    previous = None
                continue

            kind, text = self._match_php(source, pos)
            if kind is TokenKind.IDENTIFIER:
                kind = self._classify_word(text, previous)

            token = Token(kind, text, line)
            yield token
            line += text.count("\n")
            pos += len(text)

            if kind is TokenKind.CLOSE_TAG:
                in_php = False
            elif kind not in _TRIVIA:
                previous = token

    @staticmethod
    def _match_php(source: str, pos: int) -> tuple[TokenKind, str]:
        for kind, pattern in _PHP_RULES:
            match = pattern.match(source, pos)
            if match and match.end() > pos:
                return kind, match.group()
        # unreachable: the OTHER rule matches any single character
        return TokenKind.OTHER, source[pos]

    @staticmethod
    def _classify_word(text: str, previous: Optional[Token]) -> TokenKind:
        if previous is not None and previous.kind is TokenKind.OPERATOR and previous.text in _MEMBER_ACCESS:
            return TokenKind.IDENTIFIER
        return KEYWORDS.get(text.lower(), TokenKind.IDENTIFIER)


def tokenize(source: str) -> TokenStream:
    """Convenience wrapper around PhpLexer().tokenize()."""
    return PhpLexer().tokenize(source)
