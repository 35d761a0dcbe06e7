"""CLI command handlers."""

from .paths import cmd_paths
from .run import cmd_run

__all__ = [
    "cmd_paths",
    "cmd_run",
]
