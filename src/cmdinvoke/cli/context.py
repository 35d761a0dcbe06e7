"""Shared context helpers for CLI command modules."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def print_error(label: str, message: str) -> None:
    """Print a user-facing error line to stderr."""
    err_console.print(f"[bold red]{label}:[/] {escape(message)}")


def exit_status_for(exit_code: int) -> int:
    """Map a child's return code to a shell exit status.

    Negative codes mean the child died from a signal and follow the shell's
    128 + signal number convention.
    """
    if exit_code < 0:
        return 128 - exit_code
    return exit_code & 0xFF or 1
