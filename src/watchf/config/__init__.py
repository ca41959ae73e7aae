"""
Configuration management for the watchf package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

from .manager import (
    DEFAULT_CONFIG_PATH,
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    set_config_path,
)

from .loader import load_main_config, load_toml_file, normalize_keys
from .validators import (
    validate_policy_config,
    validate_supervisor_config,
    validate_watchf_config,
)

__all__ = [
    # Main interface
    "DEFAULT_CONFIG_PATH",
    "get_config",
    "get_config_path",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "normalize_keys",
    "validate_policy_config",
    "validate_supervisor_config",
    "validate_watchf_config",
]
