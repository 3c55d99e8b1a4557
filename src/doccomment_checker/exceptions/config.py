"""Configuration exceptions: input paths and settings."""

from pathlib import Path
from typing import Any

from .base import DocCheckError


class ConfigurationError(DocCheckError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a provided input path is invalid."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class MissingInputError(ConfigurationError):
    """Raised when a run is started without any file or directory to check."""

    def __init__(self) -> None:
        super().__init__(
            "No input file was given. Use -f to specify a file or directory to check."
        )
