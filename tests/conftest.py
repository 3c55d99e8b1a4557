"""Shared test fixtures for doccomment-checker tests."""

import os

import pytest

from doccomment_checker.checker import DocCommentChecker
from doccomment_checker.config import CheckerConfig
from doccomment_checker.sinks import CollectingSink


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user/project config files and DOCCHECK_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("DOCCHECK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def make_checker(sink):
    """Factory for a checker reporting into the shared collecting sink."""

    def _make(**config_kwargs) -> DocCommentChecker:
        return DocCommentChecker(config=CheckerConfig(**config_kwargs), sink=sink)

    return _make


@pytest.fixture
def checker(make_checker):
    return make_checker()


@pytest.fixture
def php_tree(tmp_path):
    """A small project: documented and undocumented files, a nested dir, noise."""
    root = tmp_path / "project"
    (root / "lib" / "sub").mkdir(parents=True)
    (root / ".git").mkdir()

    (root / "documented.php").write_text(
        "<?php\n/** File. */\n\n/** Class. */\nclass Documented {}\n"
    )
    (root / "lib" / "Bare.php").write_text("<?php\nclass Bare {\n    public $x;\n}\n")
    (root / "lib" / "sub" / "helpers.php").write_text("<?php\nfunction helper() {}\n")
    (root / "lib" / "README.md").write_text("class NotPhp {}\n")
    (root / ".git" / "hook.php").write_text("<?php\nclass Ignored {}\n")
    return root
