"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML
configuration file.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rewrite kebab-case keys to snake_case, recursing into tables.

    Both spellings are accepted in the file; a snake_case key wins when a
    table spells the same setting both ways.
    """
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = normalize_keys(value)
        snake = key.replace("-", "_")
        if snake in normalized and snake != key:
            continue
        normalized[snake] = value
    return normalized


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """
    Load the configuration file (watchf.toml) with normalized keys.

    Args:
        config_path: Path to the configuration file

    Returns:
        Parsed configuration data
    """
    return normalize_keys(load_toml_file(config_path, "watchf configuration file"))
