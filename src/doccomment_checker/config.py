"""Configuration loading and management for doccomment-checker.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in CheckerConfig)
    2. Global config (~/.doccomment-checker.toml)
    3. Project config (./doccomment-checker.toml)
    4. Explicit config file
    5. Environment variables (DOCCHECK_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(report_class_var=False)
    >>> config.report_class_var
    False
    >>> config.report_enabled(EntityKind.CLASS)
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .checking.models import EntityKind
from .exceptions import ConfigurationError, InvalidConfigError

ENV_PREFIX = "DOCCHECK_"
CONFIG_FILENAME = "doccomment-checker.toml"

# Report flag per entity kind, in the order they are displayed.
REPORT_FLAGS: dict[EntityKind, str] = {
    EntityKind.FILE: "report_file",
    EntityKind.CLASS: "report_class",
    EntityKind.INTERFACE: "report_interface",
    EntityKind.CLASS_VARIABLE: "report_class_var",
    EntityKind.CLASS_CONSTANT: "report_class_const",
    EntityKind.CONSTANT: "report_constant",
    EntityKind.FUNCTION: "report_function",
}


@dataclass(frozen=True)
class CheckerConfig:
    """Configuration for a doc-comment check run.

    Attributes:
        Reporting (one flag per entity kind; counters are kept regardless):
            report_file: Report files without a leading doc-comment
            report_class: Report classes
            report_interface: Report interfaces
            report_class_var: Report class variables (properties)
            report_class_const: Report class constants
            report_constant: Report ``define()`` constants
            report_function: Report functions and methods

        Checks:
            check_define_constants: Check ``define('NAME', ...)`` calls

        File selection:
            extensions: File suffixes checked inside directories (case-insensitive)
            exclude_patterns: Glob patterns excluded from directory traversal
            follow_symlinks: Descend into symlinked directories
            encoding: Source file encoding (undecodable bytes are replaced)
    """

    report_file: bool = True
    report_class: bool = True
    report_interface: bool = True
    report_class_var: bool = True
    report_class_const: bool = True
    report_constant: bool = True
    report_function: bool = True

    check_define_constants: bool = False

    extensions: tuple[str, ...] = (".php",)
    exclude_patterns: tuple[str, ...] = (".git", ".svn", ".hg")
    follow_symlinks: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # TOML arrays arrive as lists
        if isinstance(self.extensions, list):
            object.__setattr__(self, "extensions", tuple(self.extensions))
        if isinstance(self.exclude_patterns, list):
            object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))

        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension is required")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")
        try:
            "".encode(self.encoding)
        except LookupError:
            raise InvalidConfigError("encoding", self.encoding, "unknown encoding")

    def report_enabled(self, kind: EntityKind) -> bool:
        return bool(getattr(self, REPORT_FLAGS[kind]))

    def with_all_reports(self, enabled: bool) -> "CheckerConfig":
        """Return a copy with every report flag set to ``enabled``."""
        return replace(self, **{flag: enabled for flag in REPORT_FLAGS.values()})

    def report_items(self) -> list[tuple[EntityKind, bool]]:
        return [(kind, self.report_enabled(kind)) for kind in REPORT_FLAGS]


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> CheckerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored

    Returns:
        Validated CheckerConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_config_file(global_config, "global"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_config_file(project_config, "project"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file, "explicit"))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CheckerConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_config_file(path: Path, label: str) -> dict[str, Any]:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}")
    # A [doccomment-checker] table is accepted as well as top-level keys.
    section = data.get("doccomment-checker", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {label} config '{path}': expected a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DOCCHECK_* environment variables.

    Booleans accept true/false/1/0/yes/no/on/off; tuple fields take a
    comma-separated list, e.g. ``DOCCHECK_EXTENSIONS=.php,.inc``.
    """
    type_hints = get_type_hints(CheckerConfig)
    result: dict[str, Any] = {}

    for f in fields(CheckerConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            result[f.name] = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    if type_hint is bool:
        lower = value.strip().lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    origin = getattr(type_hint, "__origin__", None)
    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli is not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)


default_config = CheckerConfig()
