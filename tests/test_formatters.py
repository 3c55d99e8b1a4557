"""Tests for the formatters package."""

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from doccomment_checker.checker import RunResult
from doccomment_checker.checking.models import Counters, EntityKind, Finding
from doccomment_checker.config import CheckerConfig
from doccomment_checker.formatters import (
    GithubFormatter,
    JsonFormatter,
    RichFormatter,
    TextFormatter,
    get_formatter,
)


def _make_result(**config) -> RunResult:
    counters = Counters()
    counters.files_checked = 2
    counters.directories_checked = 1
    counters.record_missing(EntityKind.FILE)
    counters.record_missing(EntityKind.CLASS)
    counters.record_found(EntityKind.FUNCTION)
    counters.record_missing(EntityKind.CLASS_VARIABLE)
    return RunResult(
        config=CheckerConfig(**config),
        counters=counters,
        findings=[
            Finding("lib/Bare.php", 1, "Missing file level doc-comment"),
            Finding("lib/Bare.php", 2, "Missing doc-comment for class `Bare`"),
        ],
        missing_paths=[Path("nope.php")],
    )


class TestGetFormatter:
    def test_known_formatters(self):
        for name in ("text", "rich", "json", "github"):
            assert get_formatter(name) is not None

    def test_types(self):
        assert isinstance(get_formatter("text"), TextFormatter)
        assert isinstance(get_formatter("github"), GithubFormatter)

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestTextFormatter:
    def test_format(self):
        output = TextFormatter().format(_make_result())
        assert output.splitlines() == [
            "Error: File or directory `nope.php` does not exist.",
            "lib/Bare.php:1: Missing file level doc-comment",
            "lib/Bare.php:2: Missing doc-comment for class `Bare`",
            "Missing:",
            "\tFile doc-comments: 1",
            "\tClass doc-comments: 1",
            "\tInterface doc-comments: 0",
            "\tFunction doc-comments: 0",
            "\tClass constant doc-comments: 0",
            "\tClass variable doc-comments: 1",
            "\tMissing Doc-comments: 2",
        ]

    def test_constant_row_only_with_define_check(self):
        output = TextFormatter().format(_make_result(check_define_constants=True))
        assert "\tConstant doc-comments: 0" in output.splitlines()

    def test_render_prints(self, capsys):
        TextFormatter().render(_make_result())
        assert "Missing Doc-comments: 2" in capsys.readouterr().out


class TestJsonFormatter:
    def test_format(self):
        data = json.loads(JsonFormatter().format(_make_result()))
        assert data["reported"] == 2
        assert data["findings"][1] == {
            "file": "lib/Bare.php",
            "line": 2,
            "message": "Missing doc-comment for class `Bare`",
        }
        assert data["counters"]["entities"]["class_var"] == {"found": 0, "missing": 1}
        assert data["counters"]["entities"]["function"] == {"found": 1, "missing": 0}
        assert data["missing_paths"] == ["nope.php"]
        assert data["unreadable_paths"] == []


class TestGithubFormatter:
    def test_annotations(self):
        lines = GithubFormatter().format(_make_result()).splitlines()
        assert lines == [
            "::error::File or directory `nope.php` does not exist.",
            "::warning file=lib/Bare.php,line=1::Missing file level doc-comment",
            "::warning file=lib/Bare.php,line=2::Missing doc-comment for class `Bare`",
        ]

    def test_escapes_newlines(self):
        result = _make_result()
        result.findings = [Finding("a.php", 1, "50%\nof it")]
        result.missing_paths = []
        assert GithubFormatter().format(result) == "::warning file=a.php,line=1::50%25%0Aof it"


class TestRichFormatter:
    def test_render_tables(self):
        buffer = io.StringIO()
        formatter = RichFormatter(Console(file=buffer, width=200, color_system=None))
        assert formatter.format(_make_result()) == ""
        output = buffer.getvalue()
        assert "nope.php" in output
        assert "Missing doc-comments" in output
        assert "lib/Bare.php" in output
        assert "Class variable doc-comments" in output
        assert "2 file(s) checked, 2 reported" in output

    def test_clean_run(self):
        buffer = io.StringIO()
        result = RunResult(config=CheckerConfig(), counters=Counters())
        RichFormatter(Console(file=buffer, width=200, color_system=None)).render(result)
        assert "No missing doc-comments reported." in buffer.getvalue()
