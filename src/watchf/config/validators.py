"""
Configuration validation utilities.

This module turns raw, key-normalized TOML data into validated
configuration dataclasses.
"""

import logging
from typing import Any, Dict, List

from ..models.config import (
    DEFAULT_MESSAGE_FORMAT,
    PolicyConfig,
    SupervisorConfig,
    WatchfConfig,
)
from ..system.commands import format_command, is_program_available
from ..validation import (
    ValidationError,
    validate_command,
    validate_enum_choice,
    validate_path_exists,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

logger = logging.getLogger(__name__)

BUILD_FAILURE_POLICIES = ["abort", "wait"]
KILL_FAILURE_POLICIES = ["abort", "retry"]
ARTIFACT_MAP_MODES = ["upsert", "replace"]


def _require_table(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=table)
    return table


def validate_policy_config(policy_data: Dict[str, Any]) -> PolicyConfig:
    """
    Validate the `[policy]` table.

    Raises:
        ValidationError: If a policy name is not recognized
    """
    return PolicyConfig(
        on_build_failure=validate_enum_choice(
            policy_data.get("on_build_failure", "abort"),
            valid_choices=BUILD_FAILURE_POLICIES,
            field_name="policy.on-build-failure",
        ),
        on_kill_failure=validate_enum_choice(
            policy_data.get("on_kill_failure", "abort"),
            valid_choices=KILL_FAILURE_POLICIES,
            field_name="policy.on-kill-failure",
        ),
        artifact_map=validate_enum_choice(
            policy_data.get("artifact_map", "upsert"),
            valid_choices=ARTIFACT_MAP_MODES,
            field_name="policy.artifact-map",
        ),
    )


def validate_supervisor_config(supervisor_data: Dict[str, Any]) -> SupervisorConfig:
    """
    Validate the `[supervisor]` table.

    Raises:
        ValidationError: If a value is out of range
    """
    return SupervisorConfig(
        termination_timeout=validate_positive_float(
            supervisor_data.get("termination_timeout", 5.0),
            min_value=0.1,
            max_value=600.0,
            field_name="supervisor.termination-timeout",
        ),
        kill_retry_attempts=validate_positive_integer(
            supervisor_data.get("kill_retry_attempts", 3),
            min_value=1,
            max_value=100,
            field_name="supervisor.kill-retry-attempts",
        ),
        kill_retry_delay=validate_positive_float(
            supervisor_data.get("kill_retry_delay", 0.5),
            min_value=0.0,
            max_value=60.0,
            field_name="supervisor.kill-retry-delay",
        ),
    )


def _warn_if_missing_program(command: List[str], field_name: str) -> None:
    # Relative paths like target/debug/app may not exist until the first build.
    if not is_program_available(command[0]):
        logger.warning(
            f"{field_name}: program '{command[0]}' was not found "
            f"(command: {format_command(command)})"
        )


def validate_watchf_config(data: Dict[str, Any]) -> WatchfConfig:
    """
    Validate and create a WatchfConfig from raw configuration data.

    Args:
        data: Key-normalized configuration from TOML

    Returns:
        Validated WatchfConfig instance

    Raises:
        ValidationError: If validation fails
    """
    for required in ("build_cmd", "run_cmd", "watch"):
        if required not in data:
            raise ValidationError(
                f"Missing required key '{required.replace('_', '-')}'",
                field_name=required,
            )

    build_cmd = validate_command(data["build_cmd"], field_name="build-cmd")
    run_cmd = validate_command(data["run_cmd"], field_name="run-cmd")
    _warn_if_missing_program(build_cmd, "build-cmd")

    watch_entries = validate_string_list(data["watch"], field_name="watch")
    watch = [
        validate_path_exists(entry, field_name=f"watch[{i}]")
        for i, entry in enumerate(watch_entries)
    ]

    message_format = validate_string_list(
        data.get("message_format", list(DEFAULT_MESSAGE_FORMAT)),
        field_name="message-format",
        allow_empty=True,
    )

    policy = validate_policy_config(_require_table(data, "policy"))
    supervisor = validate_supervisor_config(_require_table(data, "supervisor"))

    return WatchfConfig(
        build_cmd=build_cmd,
        run_cmd=run_cmd,
        watch=watch,
        message_format=message_format,
        policy=policy,
        supervisor=supervisor,
    )
