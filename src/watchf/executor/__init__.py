"""
Build execution for the watchf package.

This module runs the build command and extracts the executable artifacts it
reports.
"""

from .build_process import build, extract_executables, parse_build_output

__all__ = [
    "build",
    "extract_executables",
    "parse_build_output",
]
