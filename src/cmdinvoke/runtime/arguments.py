"""Argument line formatting for external command invocations."""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Iterable, Sequence


def quote(token: str) -> str:
    """Wrap a token in double quotes. Embedded quotes are not escaped."""
    return f'"{token}"'


def combine(items: Iterable[str], quote_items: bool = True) -> str:
    """Join tokens with single spaces, optionally double-quoting each one."""
    return " ".join(quote(item) if quote_items else item for item in items)


def build_argument_string(
    sub_command: str,
    arguments: Sequence[str] | None = None,
    quote_items: bool = True,
) -> str:
    """Return the subcommand followed by the formatted argument block."""
    if not arguments:
        return sub_command
    return f"{sub_command} {combine(arguments, quote_items)}"


def build_argv(command: str, argument_line: str) -> list[str] | str:
    """Build the launch vector handed to ``subprocess.Popen``.

    On POSIX the argument line is split on whitespace with quotes grouping
    words, so a double-quoted token stays a single argv entry. Backslashes
    and ``#`` are ordinary characters. Windows receives the line as-is since
    ``CreateProcess`` takes a single command-line string.
    """
    if os.name == "nt":
        return f"{subprocess.list2cmdline([command])} {argument_line}".rstrip()
    return [command, *_split_argument_line(argument_line)]


def _split_argument_line(argument_line: str) -> list[str]:
    lexer = shlex.shlex(argument_line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    lexer.escapedquotes = ""
    return list(lexer)
