"""
Helper utilities for NCD.

Provides:
- Settings loading (TOML, merged over defaults)
- Logging setup
- Path output cleanup
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml
from loguru import logger

DEFAULT_SETTINGS: Dict[str, Any] = {
    "search": {
        "strategy": "origin",
        "fuzzy": False,
        "exact": False,
        "parallel_roots": False,
    },
    "roots": [],
    "suggest": {
        "enabled": True,
        "limit": 3,
        "threshold": 60,
    },
    "logging": {
        "level": "WARNING",
    },
}

VERBATIM_PREFIX = "\\\\?\\"

TRUTHY = {"1", "true", "yes", "on"}


def parse_flag(value: Any) -> Optional[bool]:
    """Read a boolean from a setting or environment variable; blank is None."""
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return value.strip().lower() in TRUTHY
    return bool(value)


def default_settings_path(environ=None) -> Path:
    """$NCD_CONFIG, else ~/.config/ncd/settings.toml."""
    if environ is None:
        environ = os.environ
    override = environ.get("NCD_CONFIG")
    if override:
        return Path(override)
    return Path.home() / ".config" / "ncd" / "settings.toml"


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        path: Settings file (defaults to default_settings_path())

    Returns:
        Dictionary containing settings with defaults applied

    A missing file yields the defaults; an unreadable or malformed one is
    logged and also yields the defaults. Mistyped sections and numbers are
    dropped with a warning.
    """
    settings_path = Path(path) if path else default_settings_path()

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}")
        return _deep_merge(DEFAULT_SETTINGS, {})

    if not isinstance(loaded.get("roots", []), list):
        logger.warning("Ignoring 'roots': expected an array of tables")
        loaded.pop("roots")
    _drop_invalid(loaded)
    return _deep_merge(DEFAULT_SETTINGS, loaded)


def _drop_invalid(loaded: Dict[str, Any]) -> None:
    """Remove sections that are not tables and numbers that are not integers."""
    for section, defaults in DEFAULT_SETTINGS.items():
        if not isinstance(defaults, dict) or section not in loaded:
            continue
        values = loaded[section]
        if not isinstance(values, dict):
            logger.warning(f"Ignoring '{section}': expected a table")
            loaded.pop(section)
            continue
        for key, default in defaults.items():
            if not isinstance(default, int) or isinstance(default, bool) or key not in values:
                continue
            value = values[key]
            if not isinstance(value, int) or isinstance(value, bool):
                logger.warning(f"Ignoring '{section}.{key}' = {value!r}: expected an integer")
                values.pop(key)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence, base is not mutated)
    """
    result = {}
    for key, value in base.items():
        result[key] = _deep_merge(value, {}) if isinstance(value, dict) else value

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def setup_logging(level: Union[str, int] = "WARNING") -> None:
    """Replace loguru's default sink with a stderr sink at level (name or number)."""
    logger.remove()
    if isinstance(level, str):
        level = level.upper()
    try:
        logger.add(sys.stderr, level=level, format="<level>{level}</level>: {message}")
    except (TypeError, ValueError):
        logger.add(sys.stderr, level="WARNING", format="<level>{level}</level>: {message}")
        logger.warning(f"Unknown log level '{level}', using WARNING")


def clean_output(path: str) -> str:
    """Strip the Windows verbatim prefix so shell built-ins accept the path."""
    if path.startswith(VERBATIM_PREFIX):
        return path[len(VERBATIM_PREFIX):]
    return path
