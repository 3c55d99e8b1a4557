"""Tests for the PHP lexer and TokenStream."""

import pytest

from doccomment_checker.scanning import PhpLexer, Token, TokenKind, TokenStream, tokenize


def kinds(source: str) -> list[TokenKind]:
    return [t.kind for t in tokenize(source)]


def significant(source: str) -> list[Token]:
    return [t for t in tokenize(source) if t.kind is not TokenKind.WHITESPACE]


class TestOpenAndCloseTags:
    """Test inline HTML, open tags and close tags."""

    def test_open_tag_owns_one_trailing_newline(self):
        stream = tokenize("<?php\n/** File. */\n")
        assert stream.at(0) == Token(TokenKind.OPEN_TAG, "<?php\n", 1)
        assert stream.at(1) == Token(TokenKind.DOC_COMMENT, "/** File. */", 2)
        assert stream.kind_at(2) is TokenKind.WHITESPACE

    def test_inline_html_before_and_after_php(self):
        stream = tokenize("<html>\n<?php echo 1; ?>\nafter")
        tokens = list(stream)
        assert tokens[0] == Token(TokenKind.INLINE_HTML, "<html>\n", 1)
        assert tokens[1] == Token(TokenKind.OPEN_TAG, "<?php ", 2)
        close = next(t for t in tokens if t.kind is TokenKind.CLOSE_TAG)
        assert close.text == "?>\n"
        assert tokens[-1] == Token(TokenKind.INLINE_HTML, "after", 3)

    def test_php_tag_is_case_insensitive(self):
        assert kinds("<?PHP class")[:2] == [TokenKind.OPEN_TAG, TokenKind.CLASS]

    def test_source_without_tag_is_inline_html(self):
        assert kinds("class Foo {}") == [TokenKind.INLINE_HTML]

    def test_empty_source(self):
        assert len(tokenize("")) == 0


class TestComments:
    """Test doc comments vs. ordinary comments."""

    def test_doc_comment_spans_lines(self):
        stream = tokenize("<?php\n/**\n * Summary.\n */\nclass Foo {}")
        assert stream.kind_at(1) is TokenKind.DOC_COMMENT
        assert stream.at(3).line == 5

    @pytest.mark.parametrize("comment", ["/**/", "/***/", "/* plain */", "// line", "# hash"])
    def test_plain_comments(self, comment):
        assert kinds(f"<?php {comment}")[1] is TokenKind.COMMENT

    def test_line_comment_excludes_newline(self):
        tokens = list(tokenize("<?php // hi\n$x"))
        assert tokens[1] == Token(TokenKind.COMMENT, "// hi", 1)
        assert tokens[2].kind is TokenKind.WHITESPACE
        assert tokens[3] == Token(TokenKind.VARIABLE, "$x", 2)

    def test_line_comment_stops_before_close_tag(self):
        assert kinds("<?php // a ?>html")[1:] == [
            TokenKind.COMMENT,
            TokenKind.CLOSE_TAG,
            TokenKind.INLINE_HTML,
        ]

    def test_attribute_is_not_a_comment(self):
        tokens = significant("<?php #[Pure] function f() {}")
        assert tokens[1] == Token(TokenKind.OPERATOR, "#[", 1)

    def test_unterminated_comment_runs_to_eof(self):
        stream = tokenize("<?php /* never closed\nclass Foo {}")
        assert stream.kind_at(len(stream) - 1) is TokenKind.COMMENT


class TestKeywords:
    """Test keyword classification."""

    def test_declaration_keywords(self):
        tokens = significant("<?php abstract class interface function const static public private protected")
        assert [t.kind for t in tokens[1:]] == [
            TokenKind.ABSTRACT,
            TokenKind.CLASS,
            TokenKind.INTERFACE,
            TokenKind.FUNCTION,
            TokenKind.CONST,
            TokenKind.STATIC,
            TokenKind.PUBLIC,
            TokenKind.PRIVATE,
            TokenKind.PROTECTED,
        ]

    def test_keywords_are_case_insensitive(self):
        assert kinds("<?php ABSTRACT Class")[1:] == [
            TokenKind.ABSTRACT,
            TokenKind.WHITESPACE,
            TokenKind.CLASS,
        ]

    @pytest.mark.parametrize("source", ["Foo::class", "$obj->function", "$obj?->const", "Foo:: static"])
    def test_keyword_after_member_access_is_identifier(self, source):
        tokens = significant(f"<?php {source}")
        assert tokens[-1].kind is TokenKind.IDENTIFIER

    def test_other_words_are_identifiers(self):
        tokens = significant("<?php define trait")
        assert [t.kind for t in tokens[1:]] == [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER]


class TestStrings:
    """Braces and keywords inside strings never leak out as tokens."""

    @pytest.mark.parametrize("literal", ["'{'", '"class {"', "`}`"])
    def test_quoted_strings(self, literal):
        tokens = significant(f"<?php $s = {literal};")
        assert [t.kind for t in tokens[1:]] == [
            TokenKind.VARIABLE,
            TokenKind.OPERATOR,
            TokenKind.STRING,
            TokenKind.SEMICOLON,
        ]

    def test_escaped_quote(self):
        tokens = significant(r"<?php 'it\'s {';")
        assert tokens[1] == Token(TokenKind.STRING, r"'it\'s {'", 1)

    def test_heredoc(self):
        stream = tokenize("<?php $s = <<<EOT\n{ class }\nEOT;\n$t;")
        assert TokenKind.CLASS not in [t.kind for t in stream]
        assert TokenKind.OPEN_BRACE not in [t.kind for t in stream]
        assert significant("<?php $s = <<<EOT\n{ class }\nEOT;\n$t;")[-2] == Token(
            TokenKind.VARIABLE, "$t", 4
        )


class TestLineNumbers:
    def test_crlf_line_endings(self):
        tokens = significant("<?php\r\n\r\nclass Foo\r\n{\r\n}")
        assert [(t.kind, t.line) for t in tokens] == [
            (TokenKind.OPEN_TAG, 1),
            (TokenKind.CLASS, 3),
            (TokenKind.IDENTIFIER, 3),
            (TokenKind.OPEN_BRACE, 4),
            (TokenKind.CLOSE_BRACE, 5),
        ]

    def test_token_text_round_trips_source(self):
        source = "<p>\n<?php\n/** Doc. */\nclass A { function b($c) { return \"}\"; } }\n?>\n</p>"
        assert "".join(t.text for t in tokenize(source)) == source


class TestTokenStream:
    """Test TokenStream bounds and helpers."""

    def test_out_of_bounds_is_none(self):
        stream = tokenize("<?php $x;")
        assert stream.at(-1) is None
        assert stream.at(len(stream)) is None
        assert stream.kind_at(99) is None

    def test_iteration_and_len(self):
        tokens = [Token(TokenKind.OPEN_TAG, "<?php ", 1), Token(TokenKind.VARIABLE, "$x", 1)]
        stream = TokenStream(tokens)
        assert len(stream) == 2
        assert list(stream) == tokens
        assert repr(stream) == "TokenStream(2 tokens)"

    def test_lexer_instance_matches_module_helper(self):
        source = "<?php /** Doc. */ function f() {}"
        assert list(PhpLexer().tokenize(source)) == list(tokenize(source))
