"""Command line interface for doccomment-checker."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.console import Console

from . import __version__
from .checker import DocCommentChecker
from .checking.models import EntityKind
from .config import CheckerConfig, load_config
from .exceptions import DocCheckError, MissingInputError
from .formatters import FORMATTERS, get_formatter
from .logging_config import setup_logging
from .sinks import LoggingSink

console = Console()

app = typer.Typer(
    name="doccomment-checker",
    help="Report PHP classes, interfaces, functions, properties and constants without a doc-comment.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Labels shown by --print-config, in display order.
CONFIG_LABELS = {
    EntityKind.FILE: "File Comments",
    EntityKind.CLASS: "Class Comments",
    EntityKind.INTERFACE: "Interface Comments",
    EntityKind.CLASS_VARIABLE: "Class Variable Comments",
    EntityKind.CLASS_CONSTANT: "Class Constant Comments",
    EntityKind.CONSTANT: "Constant Comments",
    EntityKind.FUNCTION: "Function Comments",
}


def format_config(config: CheckerConfig) -> str:
    lines = ["Config"]
    for kind, enabled in config.report_items():
        lines.append(f"\t{CONFIG_LABELS[kind]}: {'TRUE' if enabled else 'FALSE'}")
    return "\n".join(lines)


def resolve_config(
    config_file: Optional[Path] = None,
    report_flags: Optional[dict] = None,
    report_all: bool = False,
    report_none: bool = False,
    check_defines: bool = False,
) -> CheckerConfig:
    """Build the run config: --report-none first, per-kind flags next, --report-all last."""
    config = load_config(config_file=config_file, check_define_constants=True if check_defines else None)
    if report_none:
        config = config.with_all_reports(False)
    flags = {name: value for name, value in (report_flags or {}).items() if value is not None}
    if flags:
        config = replace(config, **flags)
    if report_all:
        config = config.with_all_reports(True)
    return config


@app.command()
def check(
    files: Optional[List[Path]] = typer.Option(
        None,
        "-f",
        "--file",
        help="File to check, or directory to check recursively (repeatable)",
    ),
    print_config: bool = typer.Option(
        False,
        "-c",
        "--print-config",
        help="Print the effective report flags",
    ),
    report_file_level: Optional[bool] = typer.Option(
        None, "--report-file-level/--noreport-file-level", help="Report missing file doc-comments"
    ),
    report_class_level: Optional[bool] = typer.Option(
        None, "--report-class-level/--noreport-class-level", help="Report missing class doc-comments"
    ),
    report_interface_level: Optional[bool] = typer.Option(
        None,
        "--report-interface-level/--noreport-interface-level",
        help="Report missing interface doc-comments",
    ),
    report_class_var_level: Optional[bool] = typer.Option(
        None,
        "--report-class-var-level/--noreport-class-var-level",
        help="Report missing class variable doc-comments",
    ),
    report_class_const_level: Optional[bool] = typer.Option(
        None,
        "--report-class-const-level/--noreport-class-const-level",
        help="Report missing class constant doc-comments",
    ),
    report_constant_level: Optional[bool] = typer.Option(
        None,
        "--report-constant-level/--noreport-constant-level",
        help="Report missing define() constant doc-comments",
    ),
    report_function_level: Optional[bool] = typer.Option(
        None,
        "--report-function-level/--noreport-function-level",
        help="Report missing function doc-comments",
    ),
    report_all: bool = typer.Option(False, "--report-all", help="Report every entity kind"),
    report_none: bool = typer.Option(False, "--report-none", help="Report no entity kind"),
    check_defines: bool = typer.Option(
        False, "--check-defines", help="Also check define('NAME', ...) constants"
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        help="Output format",
        click_type=click.Choice(sorted(FORMATTERS), case_sensitive=False),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any finding was reported"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Check PHP files for missing doc-comments.

    Examples:

      doccomment-checker -f src/

      doccomment-checker -f lib/Foo.php --noreport-class-var-level

      doccomment-checker -f src/ --report-none --report-function-level --format github
    """
    if version:
        typer.echo(f"doccomment-checker {__version__}")
        raise typer.Exit(0)

    logger = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    try:
        settings = resolve_config(
            config_file=config,
            report_flags={
                "report_file": report_file_level,
                "report_class": report_class_level,
                "report_interface": report_interface_level,
                "report_class_var": report_class_var_level,
                "report_class_const": report_class_const_level,
                "report_constant": report_constant_level,
                "report_function": report_function_level,
            },
            report_all=report_all,
            report_none=report_none,
            check_defines=check_defines,
        )

        if print_config:
            typer.echo(format_config(settings))
            if not files:
                raise typer.Exit(0)

        if not files:
            raise MissingInputError()

        # Findings stream into the debug log; the formatter prints them at the end.
        checker = DocCommentChecker(config=settings, sink=LoggingSink(logger, logging.DEBUG))
        result = checker.run(files)
        get_formatter(output_format.lower()).render(result)

        if strict and not result.clean:
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except MissingInputError as e:
        typer.echo(f"Error: {e.message}")
        raise typer.Exit(2)

    except DocCheckError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Check interrupted by user")
        console.print("\n[yellow]Check interrupted[/yellow]")
        raise typer.Exit(130)


def main() -> None:
    """Console script entry point."""
    app()
