"""Configuration file loader for fareversion.

Supports two formats:

- ``fareversion.toml``: settings under the ``[fareversion]`` table
- ``pyproject.toml``: settings under the ``[tool.fareversion]`` table

Discovery order:

1. Explicit path from ``--config`` or ``FAREVERSION_CONFIG``
2. ``fareversion.toml`` in the current directory
3. ``pyproject.toml`` with a ``[tool.fareversion]`` section

Configuration precedence: defaults < config file < environment < CLI args.

Example (``fareversion.toml``)::

    [fareversion]
    inclusive_end = false
    date_format = "%d.%m.%Y"
    show_explanation = true
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from fareversion.exceptions import ConfigError, FileOperationError
from fareversion.utils.filesystem import safe_read_file
from fareversion.utils.logger import get_logger
from fareversion.constants import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_INCLUSIVE_END,
    DEFAULT_SHOW_EXPLANATION,
)

logger = get_logger("config")

CONFIG_FILE_NAME = "fareversion.toml"
SECTION_NAME = "fareversion"

# Option name -> expected Python type
_OPTION_TYPES: Dict[str, type] = {
    "inclusive_end": bool,
    "date_format": str,
    "show_explanation": bool,
}


@dataclass
class FareVersionConfig:
    """Parsed and validated fareversion configuration.

    Attributes:
        inclusive_end: Treat a version's ``close`` instant as covered.
        date_format: ``strftime`` format for dates in command output.
        show_explanation: Print the explanation below resolve results.
        source_path: Path to the loaded file, or ``None`` for defaults.
    """

    inclusive_end: bool = DEFAULT_INCLUSIVE_END
    date_format: str = DEFAULT_DATE_FORMAT
    show_explanation: bool = DEFAULT_SHOW_EXPLANATION

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the user-facing options for debug logging."""
        return {name: getattr(self, name) for name in _OPTION_TYPES}


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Path given on the command line or via the
            environment. If provided, it must exist.

    Returns:
        Resolved path to the config file, or ``None`` if none was found.

    Raises:
        ConfigError: ``explicit_path`` does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    own_file = cwd / CONFIG_FILE_NAME
    if own_file.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, own_file)
        return own_file

    pyproject = cwd / "pyproject.toml"
    if pyproject.is_file() and _pyproject_has_section(pyproject):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", SECTION_NAME, pyproject)
        return pyproject

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Return True if ``pyproject.toml`` has a ``[tool.fareversion]`` table.

    An unreadable or invalid pyproject is treated as "no section" so that a
    broken unrelated project file does not stop the tool.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring %s: %s", path, exc)
        return False
    return SECTION_NAME in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> FareVersionConfig:
    """Load and validate fareversion configuration.

    Args:
        config_path: Explicit path. ``None`` means auto-discovery (see
            :func:`discover_config_file`).

    Returns:
        Validated :class:`FareVersionConfig`; defaults if no file was found.

    Raises:
        ConfigError: The file cannot be parsed, has unknown keys, or holds
            values of the wrong type.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return FareVersionConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(SECTION_NAME, {})
    else:
        section = raw.get(SECTION_NAME, {})

    if not section:
        logger.debug("Config file has no %s section, using defaults", SECTION_NAME)
        return FareVersionConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: The file cannot be read or is not valid TOML.
    """
    try:
        text = safe_read_file(path)
    except FileOperationError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc.message}",
            config_path=str(path),
        ) from exc

    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> FareVersionConfig:
    """Validate the ``[fareversion]`` table and build a config from it.

    Raises:
        ConfigError: Unknown keys or values of the wrong type.
    """
    unknown = set(section) - set(_OPTION_TYPES)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = FareVersionConfig()
    for name, expected in _OPTION_TYPES.items():
        if name not in section:
            continue
        value = section[name]
        if not isinstance(value, expected):
            raise ConfigError(
                f"{name} must be a {_type_label(expected)}, "
                f"got {type(value).__name__}",
                config_path=config_path,
                option=name,
            )
        setattr(config, name, value)

    if not config.date_format.strip():
        raise ConfigError(
            "date_format must not be empty",
            config_path=config_path,
            option="date_format",
        )

    return config


def _type_label(expected: type) -> str:
    return {bool: "boolean", str: "string"}.get(expected, expected.__name__)
