"""Runtime primitives for launching external commands."""

from cmdinvoke.runtime.arguments import build_argument_string, combine, quote
from cmdinvoke.runtime.command_runner import (
    CommandEvent,
    CommandRunner,
    InvocationRequest,
    get_command_runner,
)
from cmdinvoke.runtime.errors import (
    CommandExitError,
    CommandInvocationError,
    CommandLaunchError,
    CommandTimeoutError,
)
from cmdinvoke.runtime.invocation import (
    CommandInvoker,
    get_invoker,
    run,
    run_async,
    run_deferred,
)

__all__ = [
    "CommandEvent",
    "CommandExitError",
    "CommandInvocationError",
    "CommandInvoker",
    "CommandLaunchError",
    "CommandRunner",
    "CommandTimeoutError",
    "InvocationRequest",
    "build_argument_string",
    "combine",
    "get_command_runner",
    "get_invoker",
    "quote",
    "run",
    "run_async",
    "run_deferred",
]
