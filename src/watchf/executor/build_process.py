"""
Build invocation and artifact extraction.

This module runs the configured build command with machine-readable output
enabled and pulls the paths of freshly built executables out of the
line-delimited JSON records the build tool prints on stdout.

Only records tagged ``"reason": "compiler-artifact"`` are inspected. Among
those, a record names an executable when its target kinds contain ``"bin"``
and it carries a non-empty ``"executable"`` path. Every other line, whether
it is a different record type, a non-JSON progress line or malformed JSON,
is skipped without complaint.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models.config import DEFAULT_MESSAGE_FORMAT
from ..models.runtime import BuildArtifact
from ..system.commands import format_command, run_captured
from ..validation import (
    BuildOutputError,
    BuildSpawnError,
    NonZeroExitError,
)

logger = logging.getLogger(__name__)

ARTIFACT_REASON = "compiler-artifact"
EXECUTABLE_KIND = "bin"


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _artifact_from_record(record: Dict[str, Any]) -> BuildArtifact:
    target = record.get("target")
    if not isinstance(target, dict):
        target = {}

    executable: Optional[Path] = None
    raw_executable = record.get("executable")
    if isinstance(raw_executable, str) and raw_executable:
        executable = Path(raw_executable)

    target_name = target.get("name")
    package_id = record.get("package_id")
    return BuildArtifact(
        reason=record["reason"],
        package_id=package_id if isinstance(package_id, str) else "",
        target_name=target_name if isinstance(target_name, str) else "",
        target_kinds=_string_list(target.get("kind")),
        filenames=_string_list(record.get("filenames")),
        executable=executable,
        fresh=record.get("fresh") is True,
    )


def parse_build_output(stdout: str) -> List[BuildArtifact]:
    """
    Parse build tool output into artifact records.

    Args:
        stdout: The complete captured standard output of the build

    Returns:
        The `compiler-artifact` records in the order they appeared
    """
    artifacts = []
    for line in stdout.split("\n"):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            continue
        if not isinstance(record, dict) or record.get("reason") != ARTIFACT_REASON:
            continue
        artifacts.append(_artifact_from_record(record))
    return artifacts


def extract_executables(artifacts: Iterable[BuildArtifact]) -> List[Path]:
    """Return executable paths of `bin` targets, in order, duplicates kept."""
    executables = []
    for artifact in artifacts:
        if not artifact.is_executable:
            continue
        logger.debug(
            f"Executable artifact {artifact.target_name or artifact.package_id}: "
            f"{artifact.executable} (fresh={artifact.fresh})"
        )
        executables.append(artifact.executable)
    return executables


def build(
    build_cmd: Sequence[str],
    message_format: Sequence[str] = tuple(DEFAULT_MESSAGE_FORMAT),
) -> List[Path]:
    """
    Run the build and return the paths of the executables it produced.

    The build's stderr is inherited so compiler diagnostics reach the user;
    stdout is captured in full and parsed once the process has exited.

    Args:
        build_cmd: Program followed by its arguments
        message_format: Arguments appended to request JSON records

    Returns:
        Executable paths in the order the build reported them

    Raises:
        BuildSpawnError: If the build command cannot be started
        NonZeroExitError: If the build command exits with a failure status
        BuildOutputError: If stdout is not valid UTF-8
    """
    command = [*build_cmd, *message_format]
    command_str = format_command(command)
    logger.info(f"Building: {command_str}")

    try:
        returncode, raw_stdout = run_captured(command)
    except OSError as e:
        raise BuildSpawnError(command_str, e) from e

    if returncode != 0:
        raise NonZeroExitError(command_str, returncode)

    try:
        stdout = raw_stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BuildOutputError(f"build output of '{command_str}' is not valid UTF-8: {e}") from e

    executables = extract_executables(parse_build_output(stdout))
    logger.info(f"Build succeeded with {len(executables)} executable artifact(s)")
    return executables
