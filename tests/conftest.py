"""
Pytest configuration and shared fixtures for the watchf test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the watchf project.
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict

import pytest
import toml

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from watchf.config import clear_config_cache  # noqa: E402
from watchf.models import WatchfConfig  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Keep the configuration singleton from leaking between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def sample_config_data(temp_dir) -> Dict[str, Any]:
    """Key-normalized configuration data pointing at a real watch directory."""
    src_dir = temp_dir / "src"
    src_dir.mkdir()
    return {
        "build_cmd": ["cargo", "build"],
        "run_cmd": ["target/debug/app", "--port", "8080"],
        "watch": [str(src_dir)],
        "policy": {
            "on_build_failure": "abort",
            "on_kill_failure": "abort",
            "artifact_map": "upsert",
        },
        "supervisor": {
            "termination_timeout": 5.0,
            "kill_retry_attempts": 3,
            "kill_retry_delay": 0.5,
        },
    }


@pytest.fixture
def write_config(temp_dir):
    """Return a helper that writes a TOML config file and returns its path."""

    def _write(data: Dict[str, Any], name: str = "watchf.toml") -> Path:
        path = temp_dir / name
        with open(path, "w") as f:
            toml.dump(data, f)
        return path

    return _write


@pytest.fixture
def make_config(temp_dir):
    """Return a factory for WatchfConfig objects with test-friendly defaults."""

    def _make(**overrides) -> WatchfConfig:
        config = WatchfConfig(
            build_cmd=["cargo", "build"],
            run_cmd=["target/debug/app"],
            watch=[temp_dir],
        )
        for key, value in overrides.items():
            if key in ("on_build_failure", "on_kill_failure", "artifact_map"):
                setattr(config.policy, key, value)
            else:
                setattr(config, key, value)
        return config

    return _make


def set_mtime(path: Path, mtime: float) -> Path:
    """Create ``path`` if needed and pin its modification time."""
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def touch():
    """Expose set_mtime as a fixture."""
    return set_mtime
