"""
Exception types and error handling helpers.

This module provides the exception hierarchy used across the application
together with small helpers that log errors consistently and optionally
re-raise them.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    This is the exception type raised for every malformed configuration value.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class WatchfError(Exception):
    """Base exception for runtime errors."""

    pass


class BuildError(WatchfError):
    """The build command could not produce a usable result."""

    pass


class BuildSpawnError(BuildError):
    """The build command could not be started."""

    def __init__(self, command: str, cause: OSError):
        super().__init__(f"failed to start build command '{command}': {cause}")
        self.command = command
        self.cause = cause


class NonZeroExitError(BuildError):
    """The build command exited with a failure status."""

    def __init__(self, command: str, returncode: int):
        super().__init__(f"build command '{command}' exited with status {returncode}")
        self.command = command
        self.returncode = returncode


class BuildOutputError(BuildError):
    """The build output or the artifacts it names could not be read."""

    pass


class SupervisorError(WatchfError):
    """The process supervisor can no longer manage its child."""

    pass


class SpawnError(SupervisorError):
    """The run command could not be started."""

    pass


class TerminationError(SupervisorError):
    """The running child could not be terminated."""

    pass


class WatchSetupError(WatchfError):
    """A watch target could not be registered."""

    pass


class ShutdownRequested(WatchfError):
    """Raised from a signal handler to unwind the main loop."""

    def __init__(self, signum: int):
        super().__init__(f"shutdown requested by signal {signum}")
        self.signum = signum


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_build_error(error: Exception, context: str, **kwargs) -> None:
    """Handle build-related errors."""
    handle_error(error, f"build {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a fatal CLI error and exit the interpreter."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
