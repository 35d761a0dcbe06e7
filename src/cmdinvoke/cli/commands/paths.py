"""Paths command: show how registered tool paths resolve."""

from __future__ import annotations

import argparse
import os

from rich.table import Table

from cmdinvoke.cli.context import console
from cmdinvoke.config.settings import settings


def cmd_paths(args: argparse.Namespace) -> int:
    """Print a table of registered tools and their resolved paths."""
    table = Table(title="Command paths")
    table.add_column("Tool", style="bold")
    table.add_column("Environment key")
    table.add_column("Path")
    table.add_column("Source", style="dim")

    for name in settings.command_names:
        setting = settings.command_setting(name)
        source = "env" if os.environ.get(setting.env_key) else "default"
        table.add_row(name, setting.env_key, settings.command_path(name), source)

    console.print(table)
    return 0
