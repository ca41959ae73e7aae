"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import WatchfConfig
from .loader import load_main_config
from .validators import validate_watchf_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[WatchfConfig] = None

# Resolved against the working directory; the CLI overrides it with --config-path.
DEFAULT_CONFIG_PATH = Path("watchf.toml")
_CONFIG_FILE_PATH = DEFAULT_CONFIG_PATH


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Clears any cached configuration so the next get_config() call loads
    from the new path.

    Args:
        config_path: Path to the watchf.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def get_config_path() -> Path:
    """Return the path get_config() loads from."""
    return _CONFIG_FILE_PATH


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> WatchfConfig:
    """
    Load and validate the configuration file.

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    config = validate_watchf_config(load_main_config(config_path))
    logger.info(
        f"Loaded configuration: {len(config.watch)} watch target(s), "
        f"build failure policy '{config.policy.on_build_failure}', "
        f"kill failure policy '{config.policy.on_kill_failure}'"
    )
    return config


def get_config() -> WatchfConfig:
    """
    Get the application configuration, loading it if necessary.

    Returns:
        The cached WatchfConfig instance

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None
