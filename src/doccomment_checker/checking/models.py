"""Data models for the checking layer: entity kinds, scan state, findings, counters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class EntityKind(Enum):
    """Documentable constructs, valued by the name used in config and output."""

    FILE = "file"
    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"
    CLASS_VARIABLE = "class_var"
    CLASS_CONSTANT = "class_const"
    CONSTANT = "constant"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    EntityKind.FILE: "File",
    EntityKind.CLASS: "Class",
    EntityKind.INTERFACE: "Interface",
    EntityKind.FUNCTION: "Function",
    EntityKind.CLASS_VARIABLE: "Class variable",
    EntityKind.CLASS_CONSTANT: "Class constant",
    EntityKind.CONSTANT: "Constant",
}


@dataclass(frozen=True)
class EntityContext:
    """An open class or interface body.

    ``depth`` counts unmatched ``{`` seen since the declaration keyword; it is
    0 until the body opens.
    """

    kind: EntityKind
    name: str
    line: int
    depth: int = 0


@dataclass(frozen=True)
class ScanState:
    """Scan-local state threaded through every step of the entity scanner.

    Attributes:
        cursor: Index of the next token to process
        contexts: Open class/interface contexts, innermost last
        function_nesting: -1 outside any function body, 0 between a function
            keyword and its body, >0 inside the body; closing the outermost
            body returns it to -1
        last_doc_comment: Index of the doc comment most recently seen or
            claimed by an entity, -1 if none
        file_doc_comment: Index of the leading doc comment held for the file
            itself, -1 once released or when there is none
    """

    cursor: int = 0
    contexts: tuple[EntityContext, ...] = ()
    function_nesting: int = -1
    last_doc_comment: int = -1
    file_doc_comment: int = -1

    @property
    def context(self) -> Optional[EntityContext]:
        return self.contexts[-1] if self.contexts else None

    @property
    def in_function_body(self) -> bool:
        return self.function_nesting > 0


@dataclass(frozen=True)
class Finding:
    """A missing doc-comment reported to a sink."""

    file: str
    line: int
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}: {self.message}"


@dataclass
class EntityTally:
    found: int = 0
    missing: int = 0

    @property
    def total(self) -> int:
        return self.found + self.missing


@dataclass
class Counters:
    """Run-wide found/missing tallies per entity kind plus traversal counts."""

    tallies: dict[EntityKind, EntityTally] = field(
        default_factory=lambda: {kind: EntityTally() for kind in EntityKind}
    )
    files_checked: int = 0
    directories_checked: int = 0

    def record_found(self, kind: EntityKind) -> None:
        self.tallies[kind].found += 1

    def record_missing(self, kind: EntityKind) -> None:
        self.tallies[kind].missing += 1

    def found(self, kind: EntityKind) -> int:
        return self.tallies[kind].found

    def missing(self, kind: EntityKind) -> int:
        return self.tallies[kind].missing

    @property
    def total_found(self) -> int:
        return sum(t.found for t in self.tallies.values())

    @property
    def total_missing(self) -> int:
        return sum(t.missing for t in self.tallies.values())

    def reset(self) -> None:
        for kind in EntityKind:
            self.tallies[kind] = EntityTally()
        self.files_checked = 0
        self.directories_checked = 0

    def to_dict(self) -> dict:
        return {
            "files_checked": self.files_checked,
            "directories_checked": self.directories_checked,
            "entities": {
                kind.value: {"found": tally.found, "missing": tally.missing}
                for kind, tally in self.tallies.items()
            },
        }
