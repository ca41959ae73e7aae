"""
Configuration data models.

This module contains the configuration structures loaded from `watchf.toml`.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

DEFAULT_MESSAGE_FORMAT = ["--message-format", "json"]


@dataclass
class PolicyConfig:
    """
    Failure and bookkeeping policies, loaded from the `[policy]` table.
    """

    # "abort" exits on a failed build, "wait" keeps watching for the next change.
    on_build_failure: str = "abort"
    # "abort" stops supervision when the child cannot be killed, "retry" retries then respawns.
    on_kill_failure: str = "abort"
    # "upsert" keeps artifacts from earlier builds, "replace" keeps only the latest build's.
    artifact_map: str = "upsert"


@dataclass
class SupervisorConfig:
    """
    Child process handling, loaded from the `[supervisor]` table.
    """

    # Seconds to wait after SIGTERM before escalating to SIGKILL.
    termination_timeout: float = 5.0
    # Attempts made when on_kill_failure is "retry".
    kill_retry_attempts: int = 3
    # Seconds between termination attempts.
    kill_retry_delay: float = 0.5


@dataclass
class WatchfConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    # The build command, program followed by arguments.
    build_cmd: List[str]
    # The command supervised in run mode.
    run_cmd: List[str]
    # Files and directories watched recursively.
    watch: List[Path]
    # Arguments appended to build_cmd to request line-delimited JSON output.
    message_format: List[str] = field(default_factory=lambda: list(DEFAULT_MESSAGE_FORMAT))
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    supervisor: SupervisorConfig = field(default_factory=SupervisorConfig)
