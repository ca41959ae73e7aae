"""
Unit tests for configuration validation functionality.
"""

from pathlib import Path

import pytest

from watchf.config.validators import (
    validate_policy_config,
    validate_supervisor_config,
    validate_watchf_config,
)
from watchf.models import DEFAULT_MESSAGE_FORMAT
from watchf.validation import ValidationError


@pytest.mark.unit
class TestWatchfConfigValidation:
    """Test cases for validate_watchf_config."""

    def test_valid_config(self, sample_config_data):
        config = validate_watchf_config(sample_config_data)

        assert config.build_cmd == ["cargo", "build"]
        assert config.run_cmd == ["target/debug/app", "--port", "8080"]
        assert config.watch == [Path(sample_config_data["watch"][0])]
        assert config.message_format == DEFAULT_MESSAGE_FORMAT
        assert config.policy.on_build_failure == "abort"

    def test_optional_tables_default(self, sample_config_data):
        del sample_config_data["policy"]
        del sample_config_data["supervisor"]

        config = validate_watchf_config(sample_config_data)

        assert config.policy.on_kill_failure == "abort"
        assert config.policy.artifact_map == "upsert"
        assert config.supervisor.termination_timeout == 5.0

    @pytest.mark.parametrize("key", ["build_cmd", "run_cmd", "watch"])
    def test_missing_required_key(self, sample_config_data, key):
        del sample_config_data[key]

        with pytest.raises(ValidationError) as exc_info:
            validate_watchf_config(sample_config_data)

        assert key.replace("_", "-") in str(exc_info.value)

    @pytest.mark.parametrize("value", [[], "cargo build", [""], ["  "], [1, 2], ["cargo", ""]])
    def test_invalid_build_cmd(self, sample_config_data, value):
        sample_config_data["build_cmd"] = value

        with pytest.raises(ValidationError) as exc_info:
            validate_watchf_config(sample_config_data)

        assert "build-cmd" in str(exc_info.value)

    def test_empty_run_cmd(self, sample_config_data):
        sample_config_data["run_cmd"] = []

        with pytest.raises(ValidationError) as exc_info:
            validate_watchf_config(sample_config_data)

        assert "run-cmd" in str(exc_info.value)

    def test_missing_watch_target(self, sample_config_data, temp_dir):
        sample_config_data["watch"].append(str(temp_dir / "nope"))

        with pytest.raises(ValidationError) as exc_info:
            validate_watchf_config(sample_config_data)

        assert "watch[1]" in str(exc_info.value)

    def test_empty_watch_list(self, sample_config_data):
        sample_config_data["watch"] = []

        with pytest.raises(ValidationError):
            validate_watchf_config(sample_config_data)

    def test_custom_message_format(self, sample_config_data):
        sample_config_data["message_format"] = ["--message-format", "json-render-diagnostics"]

        config = validate_watchf_config(sample_config_data)

        assert config.message_format == ["--message-format", "json-render-diagnostics"]

    def test_policy_must_be_table(self, sample_config_data):
        sample_config_data["policy"] = "wait"

        with pytest.raises(ValidationError):
            validate_watchf_config(sample_config_data)

    def test_missing_program_only_warns(self, sample_config_data, caplog):
        sample_config_data["build_cmd"] = ["definitely-not-a-real-build-tool", "build"]

        config = validate_watchf_config(sample_config_data)

        assert config.build_cmd[0] == "definitely-not-a-real-build-tool"
        assert "was not found" in caplog.text


@pytest.mark.unit
class TestPolicyValidation:
    """Test cases for the [policy] and [supervisor] tables."""

    def test_valid_policies(self):
        policy = validate_policy_config(
            {"on_build_failure": "wait", "on_kill_failure": "retry", "artifact_map": "replace"}
        )

        assert policy.on_build_failure == "wait"
        assert policy.on_kill_failure == "retry"
        assert policy.artifact_map == "replace"

    @pytest.mark.parametrize(
        "key, value",
        [
            ("on_build_failure", "retry"),
            ("on_kill_failure", "ignore"),
            ("artifact_map", "merge"),
        ],
    )
    def test_unknown_policy(self, key, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_policy_config({key: value})

        assert key.replace("_", "-") in str(exc_info.value)

    def test_supervisor_bounds(self):
        with pytest.raises(ValidationError):
            validate_supervisor_config({"termination_timeout": 0})
        with pytest.raises(ValidationError):
            validate_supervisor_config({"kill_retry_attempts": 0})
        with pytest.raises(ValidationError):
            validate_supervisor_config({"kill_retry_attempts": True})

    def test_supervisor_values(self):
        supervisor = validate_supervisor_config(
            {"termination_timeout": 1, "kill_retry_attempts": 5, "kill_retry_delay": 0}
        )

        assert supervisor.termination_timeout == 1.0
        assert supervisor.kill_retry_attempts == 5
        assert supervisor.kill_retry_delay == 0.0
