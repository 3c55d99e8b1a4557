"""
File operations for doccomment-checker.

Reading source files and enumerating the source files below a directory.
"""

import fnmatch
from collections.abc import Iterable
from pathlib import Path

from .exceptions import FileAccessError


def safe_read_file(filepath: Path, encoding: str = "utf-8", errors: str = "replace") -> str:
    """
    Read a source file, replacing undecodable bytes.

    Args:
        filepath: File to read
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read
    """
    try:
        # newline="" keeps \r\n intact so token text matches the file
        with open(filepath, encoding=encoding, errors=errors, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def is_excluded(path: Path, root: Path, exclude_patterns: Iterable[str]) -> bool:
    """True if ``path`` (relative to ``root``) or any of its parts matches a pattern."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    candidates = [relative.as_posix(), *relative.parts]
    return any(
        fnmatch.fnmatch(candidate, pattern)
        for pattern in exclude_patterns
        for candidate in candidates
    )


def has_extension(path: Path, extensions: Iterable[str]) -> bool:
    suffix = path.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)


def list_directory(
    directory: Path,
    root: Path,
    extensions: Iterable[str] = (".php",),
    exclude_patterns: Iterable[str] = (),
    follow_symlinks: bool = False,
) -> list[Path]:
    """
    List the entries of ``directory`` worth checking, sorted by name.

    Subdirectories are kept unless excluded (or symlinked, when
    ``follow_symlinks`` is off); files are kept when their suffix is one of
    ``extensions``. Exclude patterns are matched relative to ``root``.

    Raises:
        FileAccessError: If the directory cannot be listed
    """
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FileAccessError(directory, f"OS error: {e}")

    extensions = tuple(extensions)
    patterns = tuple(exclude_patterns)
    selected: list[Path] = []
    for entry in entries:
        if is_excluded(entry, root, patterns):
            continue
        if entry.is_dir():
            if entry.is_symlink() and not follow_symlinks:
                continue
            selected.append(entry)
        elif entry.is_file() and has_extension(entry, extensions):
            selected.append(entry)
    return selected
