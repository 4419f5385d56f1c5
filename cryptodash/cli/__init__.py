"""CLI commands for cryptodash.

This package provides the command-line interface for cryptodash,
including window analysis and the alert watcher.
"""

from cryptodash.cli.main import cli, main

__all__ = ["cli", "main"]
