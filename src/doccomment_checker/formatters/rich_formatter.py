"""Rich terminal formatter for doccomment-checker."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..checker import RunResult
from .base import BaseFormatter
from .text_formatter import SUMMARY_LABELS, missing_path_error


class RichFormatter(BaseFormatter):
    """Findings table followed by a found/missing summary table."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render(self, result: RunResult) -> None:
        for path in result.missing_paths:
            self.console.print(f"[red]{escape(missing_path_error(path))}[/red]", highlight=False)
        if result.findings:
            self.console.print(self._findings_table(result))
        else:
            self.console.print("[green]No missing doc-comments reported.[/green]")
        self.console.print(self._summary_table(result))

    def format(self, result: RunResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render(result)
        return ""

    def _findings_table(self, result: RunResult) -> Table:
        table = Table(title="Missing doc-comments", show_lines=False)
        table.add_column("File", style="cyan")
        table.add_column("Line", justify="right")
        table.add_column("Message")
        for f in result.findings:
            table.add_row(escape(f.file), str(f.line), escape(f.message))
        return table

    def _summary_table(self, result: RunResult) -> Table:
        counters = result.counters
        table = Table(title="Summary")
        table.add_column("Entity")
        table.add_column("Found", justify="right", style="green")
        table.add_column("Missing", justify="right", style="red")
        for kind, label in SUMMARY_LABELS:
            table.add_row(label, str(counters.found(kind)), str(counters.missing(kind)))
        table.add_row(
            "[bold]Total[/bold]",
            str(counters.total_found),
            str(counters.total_missing),
            end_section=True,
        )
        table.caption = (
            f"{counters.files_checked} file(s) checked, {result.reported} reported"
        )
        return table
