"""Reporting sinks: where missing doc-comment findings go as they are found."""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO, runtime_checkable

from .checking.models import Finding

logger = logging.getLogger(__name__)


@runtime_checkable
class ReportSink(Protocol):
    """Anything with ``report(file, line, message)``."""

    def report(self, file: str, line: int, message: str) -> None: ...


class PrintSink:
    """Print each finding as ``file:line: message`` (the default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def report(self, file: str, line: int, message: str) -> None:
        print(f"{file}:{line}: {message}", file=self.stream or sys.stdout)


class CollectingSink:
    """Keep findings in order for later formatting."""

    def __init__(self) -> None:
        self.findings: list[Finding] = []

    def report(self, file: str, line: int, message: str) -> None:
        self.findings.append(Finding(file=file, line=line, message=message))

    def __len__(self) -> int:
        return len(self.findings)

    def clear(self) -> None:
        self.findings.clear()


class LoggingSink:
    """Emit each finding as a log record with structured ``extra`` fields."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.WARNING):
        self.log = log or logger
        self.level = level

    def report(self, file: str, line: int, message: str) -> None:
        self.log.log(
            self.level,
            "%s:%d: %s",
            file,
            line,
            message,
            extra={"finding_file": file, "finding_line": line, "finding_message": message},
        )
