"""
System interaction utilities.

This module provides the subprocess primitives used to run the build
command and spawn the supervised child process.
"""

from .commands import (
    format_command,
    is_program_available,
    run_captured,
    spawn_command,
)

__all__ = [
    "format_command",
    "is_program_available",
    "run_captured",
    "spawn_command",
]
