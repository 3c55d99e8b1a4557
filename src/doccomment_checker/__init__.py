"""
doccomment-checker - PHP doc-comment coverage linter

Walks PHP files and reports classes, interfaces, functions, class variables
and constants that are not immediately preceded by a ``/** ... */``
doc-comment, plus files that do not open with one.
"""

__version__ = "0.1.0"

from .checker import DocCommentChecker, RunResult
from .checking.models import Counters, EntityKind, Finding
from .config import CheckerConfig, load_config
from .sinks import CollectingSink, LoggingSink, PrintSink, ReportSink

__all__ = [
    "DocCommentChecker",  # Main entry point
    "RunResult",
    "CheckerConfig",
    "load_config",
    "Counters",
    "EntityKind",
    "Finding",
    "ReportSink",
    "PrintSink",
    "CollectingSink",
    "LoggingSink",
]
