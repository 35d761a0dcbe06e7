"""Run command: invoke an external tool once."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from cmdinvoke.cli.context import exit_status_for, print_error
from cmdinvoke.config.settings import settings
from cmdinvoke.runtime import (
    CommandExitError,
    CommandLaunchError,
    CommandTimeoutError,
    get_invoker,
)

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_STATUS = 124
LAUNCH_FAILURE_EXIT_STATUS = 127


def cmd_run(args: argparse.Namespace) -> int:
    """Run a command and relay its output or failure."""
    command = settings.resolve_command(args.executable)
    invoker = get_invoker()
    quote_arguments = not args.no_quote
    logger.info("Invoking %s %s", command, args.sub_command)

    try:
        if args.use_async:
            output = asyncio.run(
                invoker.run_async(
                    command,
                    args.sub_command,
                    args.arguments,
                    args.timeout,
                    quote_arguments=quote_arguments,
                )
            )
        else:
            output = invoker.run(
                command,
                args.sub_command,
                args.arguments,
                args.timeout,
                quote_arguments=quote_arguments,
            )
    except CommandTimeoutError as e:
        print_error("Timed out", str(e))
        return TIMEOUT_EXIT_STATUS
    except CommandExitError as e:
        sys.stderr.write(e.stderr)
        print_error("Error", str(e))
        return exit_status_for(e.exit_code)
    except CommandLaunchError as e:
        print_error("Error", str(e))
        return LAUNCH_FAILURE_EXIT_STATUS

    sys.stdout.write(output)
    return 0
