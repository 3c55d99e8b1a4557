"""Scanning layer: token model and the PHP lexer.

Example:
    >>> from doccomment_checker.scanning import tokenize, TokenKind
    >>> stream = tokenize("<?php\\n/** File. */\\n")
    >>> stream.kind_at(1) is TokenKind.DOC_COMMENT
    True
"""

from .lexer import PhpLexer, tokenize
from .tokens import KEYWORDS, VISIBILITY_KINDS, Token, TokenKind, TokenStream

__all__ = [
    "PhpLexer",
    "tokenize",
    "Token",
    "TokenKind",
    "TokenStream",
    "KEYWORDS",
    "VISIBILITY_KINDS",
]
