"""Plain text formatter: one line per finding, then a ``Missing:`` summary."""

from ..checker import RunResult
from ..checking.models import EntityKind
from .base import BaseFormatter

# Summary rows, in display order.
SUMMARY_LABELS = (
    (EntityKind.FILE, "File doc-comments"),
    (EntityKind.CLASS, "Class doc-comments"),
    (EntityKind.INTERFACE, "Interface doc-comments"),
    (EntityKind.FUNCTION, "Function doc-comments"),
    (EntityKind.CLASS_CONSTANT, "Class constant doc-comments"),
    (EntityKind.CLASS_VARIABLE, "Class variable doc-comments"),
    (EntityKind.CONSTANT, "Constant doc-comments"),
)


def missing_path_error(path) -> str:
    return f"Error: File or directory `{path}` does not exist."


class TextFormatter(BaseFormatter):
    """The classic ``file:line: message`` output."""

    def render(self, result: RunResult) -> None:
        print(self.format(result))

    def format(self, result: RunResult) -> str:
        lines = [missing_path_error(path) for path in result.missing_paths]
        lines.extend(str(finding) for finding in result.findings)

        lines.append("Missing:")
        for kind, label in SUMMARY_LABELS:
            # define() constants are only counted when that check is on
            if kind is EntityKind.CONSTANT and not result.config.check_define_constants:
                continue
            lines.append(f"\t{label}: {result.counters.missing(kind)}")
        lines.append(f"\tMissing Doc-comments: {result.reported}")
        return "\n".join(lines)
