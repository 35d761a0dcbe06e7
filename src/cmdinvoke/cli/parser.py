"""Argument parser construction for cmdinvoke CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from e
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive: {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="cmdinvoke - run external CLI tools with bounded time"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run an external command and print its captured output",
    )
    run_parser.add_argument(
        "--timeout",
        "-t",
        type=_positive_float,
        default=None,
        help="Seconds before the process is killed (default: $CMDINVOKE_TIMEOUT or 30)",
    )
    run_parser.add_argument(
        "--no-quote",
        action="store_true",
        help="Pass arguments through without wrapping each in double quotes",
    )
    run_parser.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Run through the asynchronous entry point",
    )
    run_parser.add_argument(
        "executable",
        help="Executable path, or a registered tool name such as 'aws'",
    )
    # Everything after the executable belongs to the child, flags included
    run_parser.add_argument(
        "command_line",
        nargs=argparse.REMAINDER,
        metavar="SUBCOMMAND [ARG ...]",
        help="Subcommand token followed by the arguments appended after it",
    )

    # Paths command
    subparsers.add_parser(
        "paths",
        help="Show resolved paths for registered tools",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        if not args.command_line:
            parser.error("run: a subcommand is required after the executable")
        args.sub_command, *args.arguments = args.command_line

    return args
