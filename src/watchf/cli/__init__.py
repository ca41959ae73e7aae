"""
Command-line interface for the watchf package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
