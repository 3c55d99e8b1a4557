"""GitHub Actions formatter: one ``::warning`` annotation per finding."""

from ..checker import RunResult
from .base import BaseFormatter


def _escape(value: str) -> str:
    # Workflow command data must not contain raw newlines or percent signs.
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output GitHub Actions annotations."""

    def render(self, result: RunResult) -> None:
        print(self.format(result))

    def format(self, result: RunResult) -> str:
        lines: list[str] = []
        for path in result.missing_paths:
            lines.append(f"::error::{_escape(f'File or directory `{path}` does not exist.')}")
        for f in result.findings:
            lines.append(f"::warning file={f.file},line={f.line}::{_escape(f.message)}")
        return "\n".join(lines)
