"""Root of the doccomment-checker error hierarchy.

Errors carry a short human message plus a ``details`` mapping (the offending
path, config key or value). The command line prints ``str(error)``, which
appends the details in parentheses, and exits 1; ``MissingInputError`` is
the one exception, shown as a usage error with exit status 2. Per-file
problems during a run (``FileAccessError``) are logged and the run goes on.
"""

from typing import Dict, Optional


class DocCheckError(Exception):
    """Any failure of a check run that is not a missing doc-comment."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
