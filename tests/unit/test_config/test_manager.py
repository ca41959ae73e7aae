"""
Unit tests for configuration file loading and caching.
"""

import tomllib

import pytest

from watchf.config import (
    get_config,
    get_config_path,
    is_config_loaded,
    load_main_config,
    normalize_keys,
    set_config_path,
)
from watchf.validation import ValidationError


@pytest.mark.unit
class TestLoading:
    """Loading watchf.toml from disk."""

    def test_kebab_case_file(self, write_config, temp_dir):
        (temp_dir / "src").mkdir()
        path = write_config({
            "build-cmd": ["cargo", "build"],
            "run-cmd": ["target/debug/app"],
            "watch": [str(temp_dir / "src")],
            "policy": {"on-build-failure": "wait"},
        })
        set_config_path(path)

        config = get_config()

        assert config.build_cmd == ["cargo", "build"]
        assert config.policy.on_build_failure == "wait"

    def test_config_is_cached(self, write_config, sample_config_data):
        set_config_path(write_config(sample_config_data))

        first = get_config()

        assert is_config_loaded()
        assert get_config() is first

    def test_set_config_path_clears_cache(self, write_config, sample_config_data):
        set_config_path(write_config(sample_config_data, name="a.toml"))
        first = get_config()

        set_config_path(write_config(sample_config_data, name="b.toml"))

        assert get_config_path().name == "b.toml"
        assert not is_config_loaded()
        assert get_config() is not first

    def test_missing_file(self, temp_dir):
        set_config_path(temp_dir / "missing.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_malformed_file(self, temp_dir, caplog):
        path = temp_dir / "watchf.toml"
        path.write_text("build-cmd = [\n")
        set_config_path(path)

        with pytest.raises(tomllib.TOMLDecodeError):
            get_config()

        parse_errors = [r for r in caplog.records if r.getMessage().startswith("Error in")]
        assert len(parse_errors) == 1

    def test_invalid_values(self, write_config, sample_config_data):
        sample_config_data["run_cmd"] = []
        set_config_path(write_config(sample_config_data))

        with pytest.raises(ValidationError):
            get_config()


@pytest.mark.unit
class TestNormalizeKeys:
    """Key spelling normalization."""

    def test_nested_tables(self):
        assert normalize_keys({"build-cmd": [], "policy": {"on-kill-failure": "retry"}}) == {
            "build_cmd": [],
            "policy": {"on_kill_failure": "retry"},
        }

    def test_snake_case_wins(self):
        assert normalize_keys({"run_cmd": ["a"], "run-cmd": ["b"]}) == {"run_cmd": ["a"]}
        assert normalize_keys({"run-cmd": ["b"], "run_cmd": ["a"]}) == {"run_cmd": ["a"]}

    def test_load_main_config(self, write_config):
        path = write_config({"build-cmd": ["make"]})

        assert load_main_config(path) == {"build_cmd": ["make"]}
