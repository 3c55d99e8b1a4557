"""Doc-comment checker: runs the entity scanner over files and directories.

To check a file call ``check_file()``; to check every source file below a
directory call ``check_dir()``; to check a list of inputs the way the command
line does, call ``run()``. Findings go to a pluggable sink (printed by
default) and are also kept on the checker; found/missing counts accumulate
on ``counters`` for the whole run.

Example:
    >>> from doccomment_checker.sinks import CollectingSink
    >>> checker = DocCommentChecker(sink=CollectingSink())
    >>> _ = checker.check_source("<?php\\nclass Foo {}\\n", "foo.php")
    >>> [str(f) for f in checker.findings]
    ['foo.php:1: Missing file level doc-comment', 'foo.php:2: Missing doc-comment for class `Foo`']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from .checking.models import Counters, Finding, ScanState
from .checking.rules import AttachmentRules
from .checking.scanner import EntityScanner
from .config import CheckerConfig
from .exceptions import FileAccessError, InvalidPathError, MissingInputError
from .file_ops import list_directory, safe_read_file
from .logging_config import get_logger
from .scanning.lexer import PhpLexer
from .sinks import PrintSink, ReportSink

logger = get_logger(__name__)


@dataclass
class RunResult:
    """Everything a formatter needs once a run has finished."""

    config: CheckerConfig
    counters: Counters
    findings: list[Finding] = field(default_factory=list)
    missing_paths: list[Path] = field(default_factory=list)
    unreadable_paths: list[Path] = field(default_factory=list)

    @property
    def reported(self) -> int:
        return len(self.findings)

    @property
    def clean(self) -> bool:
        return not self.findings


class DocCommentChecker:
    """Checks PHP sources for missing doc-comments.

    Args:
        config: Report flags and file selection (defaults to CheckerConfig())
        sink: Receives each reported finding (defaults to PrintSink())
        lexer: Tokenizer used for every file
    """

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        sink: Optional[ReportSink] = None,
        lexer: Optional[PhpLexer] = None,
    ):
        self.config = config or CheckerConfig()
        self.sink = sink if sink is not None else PrintSink()
        self.lexer = lexer or PhpLexer()
        self.counters = Counters()
        self.findings: list[Finding] = []
        self.unreadable_paths: list[Path] = []
        self._rules = AttachmentRules(self.config, self.counters, self._report)

    def reset(self) -> None:
        """Clear counters and findings; called at the start of every run."""
        self.counters.reset()
        self.findings.clear()
        self.unreadable_paths.clear()

    def run(self, paths: Iterable[Path]) -> RunResult:
        """Check every input path; missing paths are recorded and skipped.

        Raises:
            MissingInputError: If ``paths`` is empty
        """
        paths = [Path(p) for p in paths]
        if not paths:
            raise MissingInputError()

        self.reset()
        missing: list[Path] = []
        for path in paths:
            try:
                self.check_path(path)
            except InvalidPathError as e:
                logger.info("Skipping %s: %s", path, e.reason)
                missing.append(path)

        return RunResult(
            config=self.config,
            counters=self.counters,
            findings=list(self.findings),
            missing_paths=missing,
            unreadable_paths=list(self.unreadable_paths),
        )

    def check_path(self, path: Path) -> None:
        """Check a file, or every source file below a directory.

        Raises:
            InvalidPathError: If ``path`` does not exist
        """
        if not path.exists():
            raise InvalidPathError(path, "File or directory does not exist")
        if path.is_dir():
            self.check_dir(path)
        else:
            self._check_file_isolated(path)

    def check_dir(self, directory: Path, root: Optional[Path] = None) -> bool:
        """Recursively check all source files in ``directory``.

        Returns False when the directory does not exist. A plain file is
        checked directly.
        """
        if not directory.exists():
            return False
        if not directory.is_dir():
            return self._check_file_isolated(directory)

        root = root or directory
        self.counters.directories_checked += 1
        logger.debug("Checking directory %s", directory)

        try:
            entries = list_directory(
                directory,
                root,
                extensions=self.config.extensions,
                exclude_patterns=self.config.exclude_patterns,
                follow_symlinks=self.config.follow_symlinks,
            )
        except FileAccessError as e:
            logger.warning("%s", e)
            self.unreadable_paths.append(directory)
            return False

        for entry in entries:
            if entry.is_dir():
                self.check_dir(entry, root)
            else:
                self._check_file_isolated(entry)
        return True

    def check_file(self, path: Path) -> ScanState:
        """Check one file.

        Raises:
            FileAccessError: If the file cannot be read
        """
        source = safe_read_file(path, encoding=self.config.encoding)
        return self.check_source(source, str(path))

    def check_source(self, source: str, file: str = "<string>") -> ScanState:
        """Check already-loaded source text; ``file`` names it in findings."""
        self.counters.files_checked += 1
        logger.debug("Checking %s", file)
        stream = self.lexer.tokenize(source)
        scanner = EntityScanner(
            stream,
            file,
            self._rules,
            check_define_constants=self.config.check_define_constants,
        )
        return scanner.scan()

    def _check_file_isolated(self, path: Path) -> bool:
        # One unreadable file must not stop the rest of the run.
        try:
            self.check_file(path)
        except FileAccessError as e:
            logger.warning("%s", e)
            self.unreadable_paths.append(path)
            return False
        return True

    def _report(self, file: str, line: int, message: str) -> None:
        self.findings.append(Finding(file=file, line=line, message=message))
        self.sink.report(file, line, message)
