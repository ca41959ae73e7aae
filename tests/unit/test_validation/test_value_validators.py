"""
Unit tests for the value validators.
"""

from pathlib import Path

import pytest

from watchf.validation import (
    ValidationError,
    validate_command,
    validate_enum_choice,
    validate_path_exists,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)


@pytest.mark.unit
class TestValidators:
    """Test cases for individual validators."""

    def test_validate_command(self):
        assert validate_command(["cargo", "build", "--release"], "build-cmd") == ["cargo", "build", "--release"]

    @pytest.mark.parametrize(
        "value",
        [None, [], ["", "x"], ["  "], ("cargo",), ["cargo", None], ["cargo", "build", ""]],
    )
    def test_validate_command_rejects(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_command(value, "run-cmd")

        assert exc_info.value.field_name == "run-cmd"

    def test_validate_string_list(self):
        assert validate_string_list([], allow_empty=True) == []
        with pytest.raises(ValidationError):
            validate_string_list([])
        with pytest.raises(ValidationError):
            validate_string_list(["a", 3])

    def test_validate_path_exists(self, temp_dir):
        assert validate_path_exists(str(temp_dir)) == temp_dir
        with pytest.raises(ValidationError):
            validate_path_exists(temp_dir / "missing")
        with pytest.raises(ValidationError):
            validate_path_exists("")

    def test_validate_enum_choice(self):
        assert validate_enum_choice("wait", ["abort", "wait"]) == "wait"
        with pytest.raises(ValidationError):
            validate_enum_choice("later", ["abort", "wait"])

    def test_numeric_bounds(self):
        assert validate_positive_integer("4", min_value=1, max_value=10) == 4
        assert validate_positive_float(0.5, min_value=0.1) == 0.5
        with pytest.raises(ValidationError):
            validate_positive_integer(11, max_value=10)
        with pytest.raises(ValidationError):
            validate_positive_float("soon")
