"""
Command execution primitives.

Thin wrappers around subprocess used by the build extractor and the process
supervisor. Commands are always argument lists; nothing here goes through a
shell.
"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


def format_command(command: Sequence[str]) -> str:
    """Render an argument list as a shell-quoted string for log messages."""
    return shlex.join(command)


def is_program_available(program: str) -> bool:
    """Check whether a program can be found on PATH or at the given path.

    Returns:
        True if the program resolves to an executable file, False otherwise.
    """
    return shutil.which(program) is not None


def run_captured(command: Sequence[str], cwd: Optional[Path] = None) -> Tuple[int, bytes]:
    """Run a command to completion, capturing stdout and inheriting stderr.

    Blocks until the process exits; no timeout is applied.

    Args:
        command: Program followed by its arguments.
        cwd: Working directory, defaults to the current one.

    Returns:
        Tuple of (return_code, raw_stdout_bytes).

    Raises:
        OSError: If the program cannot be started.
    """
    logger.debug(f"Executing command: '{format_command(command)}'")
    process = subprocess.run(
        list(command),
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=None,
        check=False,
    )
    return process.returncode, process.stdout


def spawn_command(command: Sequence[str], cwd: Optional[Path] = None) -> subprocess.Popen:
    """Start a long-lived command that shares the caller's stdio.

    Raises:
        OSError: If the program cannot be started.
    """
    process = subprocess.Popen(list(command), cwd=cwd)
    logger.debug(f"Spawned '{format_command(command)}' with PID {process.pid}")
    return process
