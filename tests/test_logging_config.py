"""Tests for logging setup."""

import logging

import pytest

from doccomment_checker.logging_config import LOGGER_NAME, get_logger, setup_logging
from doccomment_checker.sinks import LoggingSink


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger(LOGGER_NAME).setLevel(logging.NOTSET)


class TestGetLogger:
    def test_root_logger(self):
        assert get_logger().name == "doccomment_checker"

    def test_module_name_is_nested(self):
        assert get_logger("checker").name == "doccomment_checker.checker"
        assert get_logger("doccomment_checker.sinks").name == "doccomment_checker.sinks"


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbose,quiet,level",
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.ERROR),
        ],
    )
    def test_levels(self, restore_logging, verbose, quiet, level):
        assert setup_logging(verbose=verbose, quiet=quiet).level == level

    def test_streamed_findings_reach_log_file(self, restore_logging, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(verbose=True, log_file=str(log_file))
        LoggingSink(logger, logging.DEBUG).report("a.php", 3, "Missing doc-comment for class `Foo`")
        for handler in logging.getLogger().handlers:
            handler.flush()
        text = log_file.read_text()
        assert "DEBUG" in text
        assert "a.php:3: Missing doc-comment for class `Foo`" in text

    def test_default_level_hides_streamed_findings(self, restore_logging, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(log_file=str(log_file))
        LoggingSink(logger, logging.DEBUG).report("a.php", 3, "Missing doc-comment for class `Foo`")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert log_file.read_text() == ""
