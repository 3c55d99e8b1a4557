"""
Logging setup for doccomment-checker runs.

The report itself is written to stdout by a formatter once the run ends, so
every log record goes to stderr and ``--format json`` output stays parseable.
With ``-v`` each finding is also streamed as it is found: the command line
hands the checker a ``LoggingSink`` at DEBUG, and skipped directories,
unreadable files and missing inputs are logged along the way. ``--log-file``
keeps a timestamped copy of the same records.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "doccomment_checker"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route doccomment_checker records to a stderr rich handler and an optional file.

    Args:
        verbose: DEBUG level; streamed findings and per-file progress are shown
        quiet: ERROR level; unreadable files and skipped inputs are hidden
        log_file: Append records to this file as well

    Returns:
        The ``doccomment_checker`` logger, used as the findings sink target
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, placed under ``doccomment_checker`` so ``-v``/``-q`` apply to it."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
