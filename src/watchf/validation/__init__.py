"""
Validation and error handling for the watchf package.

This module provides input validation, the exception hierarchy and error
handling helpers with consistent error reporting across the application.
"""

from .exceptions import (
    BuildError,
    BuildOutputError,
    BuildSpawnError,
    ErrorSeverity,
    NonZeroExitError,
    ShutdownRequested,
    SpawnError,
    SupervisorError,
    TerminationError,
    ValidationError,
    WatchfError,
    WatchSetupError,
    handle_build_error,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .strategies import simple_retry

from .validators import (
    validate_command,
    validate_enum_choice,
    validate_path_exists,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

__all__ = [
    # Exceptions
    "BuildError",
    "BuildOutputError",
    "BuildSpawnError",
    "ErrorSeverity",
    "NonZeroExitError",
    "ShutdownRequested",
    "SpawnError",
    "SupervisorError",
    "TerminationError",
    "ValidationError",
    "WatchfError",
    "WatchSetupError",
    # Handlers
    "handle_build_error",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Strategies
    "simple_retry",
    # Validators
    "validate_command",
    "validate_enum_choice",
    "validate_path_exists",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_string_list",
]
