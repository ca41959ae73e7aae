"""
Integration tests for running a real build command.

A small Python script stands in for the build tool: it accepts whatever
arguments are appended, prints a mix of JSON records and noise on stdout
and optionally fails.
"""

import sys
import textwrap

import pytest

from watchf.executor import build
from watchf.validation import BuildSpawnError, NonZeroExitError

FAKE_BUILD = textwrap.dedent(
    """
    import json
    import os
    import sys

    out_dir = os.path.dirname(os.path.abspath(__file__))
    status = int(os.environ.get("FAKE_BUILD_STATUS", "0"))
    print("   Compiling app v0.1.0")
    print(json.dumps({"reason": "build-script-executed", "package_id": "app"}))
    for name in ("app", "worker"):
        exe = os.path.join(out_dir, name)
        with open(exe, "w") as f:
            f.write("binary")
        print(json.dumps({
            "reason": "compiler-artifact",
            "package_id": name,
            "target": {"kind": ["bin"], "name": name},
            "filenames": [exe],
            "executable": exe,
            "fresh": False,
        }))
    print(json.dumps({
        "reason": "compiler-artifact",
        "target": {"kind": ["lib"], "name": "core"},
        "executable": None,
    }))
    print("{not json")
    print(json.dumps({"reason": "build-finished", "success": status == 0}))
    sys.exit(status)
    """
)


@pytest.fixture
def fake_build(temp_dir):
    script = temp_dir / "fake_build.py"
    script.write_text(FAKE_BUILD)
    return [sys.executable, str(script)]


@pytest.mark.integration
class TestBuildIntegration:
    """Running the build as a subprocess."""

    def test_extracts_executables(self, fake_build, temp_dir):
        executables = build(fake_build)

        assert executables == [temp_dir / "app", temp_dir / "worker"]
        assert all(path.exists() for path in executables)

    def test_custom_message_format_is_appended(self, fake_build, temp_dir):
        executables = build(fake_build, message_format=["--message-format", "json-render-diagnostics"])

        assert len(executables) == 2

    def test_nonzero_exit(self, fake_build, monkeypatch):
        monkeypatch.setenv("FAKE_BUILD_STATUS", "3")

        with pytest.raises(NonZeroExitError) as exc_info:
            build(fake_build)

        assert exc_info.value.returncode == 3
        assert "--message-format json" in exc_info.value.command

    def test_missing_program(self, temp_dir):
        with pytest.raises(BuildSpawnError):
            build([str(temp_dir / "no-such-build-tool")])
