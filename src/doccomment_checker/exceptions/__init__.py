"""Exception hierarchy for doccomment-checker."""

from .analysis import AnalysisError, FileAccessError
from .base import DocCheckError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    MissingInputError,
)

__all__ = [
    "DocCheckError",
    "AnalysisError",
    "FileAccessError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "MissingInputError",
]
