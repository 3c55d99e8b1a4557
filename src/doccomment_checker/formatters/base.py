"""Base formatter interface for doccomment-checker output rendering."""

from abc import ABC, abstractmethod

from ..checker import RunResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: RunResult) -> None:
        """Render a finished run to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, result: RunResult) -> str:
        """Return formatted string representation of a finished run."""
