"""
Change classification for the watchf package.

This module decides which filesystem changes should trigger a rebuild.
"""

from .classifier import is_newer_than, read_mtime, should_rebuild

__all__ = [
    "is_newer_than",
    "read_mtime",
    "should_rebuild",
]
