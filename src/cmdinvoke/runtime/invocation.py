"""Blocking, deferred and async entry points for command invocation.

Each entry point runs the same launcher. The deferred and async shapes move
the blocking work to a dedicated worker thread and deliver exactly one
result or exception through a future. Dropping or cancelling that future
does not stop the process; it still runs until its own timeout.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future

from cmdinvoke.config.settings import settings
from cmdinvoke.runtime.command_runner import (
    CommandEvent,
    CommandRunner,
    InvocationRequest,
    get_command_runner,
)

logger = logging.getLogger(__name__)


class CommandInvoker:
    """Public facade choosing how a command's result is delivered."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or get_command_runner()

    def run(
        self,
        command: str,
        sub_command: str,
        arguments: Sequence[str] | None = None,
        timeout: float | None = None,
        *,
        quote_arguments: bool = True,
        on_event: Callable[[CommandEvent], None] | None = None,
    ) -> str:
        """Run the command and block until its output is available."""
        request = _build_request(
            command, sub_command, arguments, timeout, quote_arguments
        )
        return self._runner.execute(request, on_event=on_event)

    def run_deferred(
        self,
        command: str,
        sub_command: str,
        arguments: Sequence[str] | None = None,
        timeout: float | None = None,
        *,
        quote_arguments: bool = True,
        on_event: Callable[[CommandEvent], None] | None = None,
    ) -> Future[str]:
        """Start the command on a worker thread and return its future."""
        request = _build_request(
            command, sub_command, arguments, timeout, quote_arguments
        )
        future: Future[str] = Future()
        # Running futures cannot be cancelled.
        future.set_running_or_notify_cancel()

        def _work() -> None:
            try:
                output = self._runner.execute(request, on_event=on_event)
            except BaseException as e:
                logger.debug("Deferred invocation failed: %r", e)
                future.set_exception(e)
                if not isinstance(e, Exception):
                    raise
            else:
                future.set_result(output)

        worker = threading.Thread(
            target=_work,
            name="cmdinvoke-invocation",
            daemon=True,
        )
        worker.start()
        return future

    async def run_async(
        self,
        command: str,
        sub_command: str,
        arguments: Sequence[str] | None = None,
        timeout: float | None = None,
        *,
        quote_arguments: bool = True,
        on_event: Callable[[CommandEvent], None] | None = None,
    ) -> str:
        """Await the command's output without blocking the event loop."""
        future = self.run_deferred(
            command,
            sub_command,
            arguments,
            timeout,
            quote_arguments=quote_arguments,
            on_event=on_event,
        )
        return await asyncio.wrap_future(future)


def _build_request(
    command: str,
    sub_command: str,
    arguments: Sequence[str] | None,
    timeout: float | None,
    quote_arguments: bool,
) -> InvocationRequest:
    return InvocationRequest(
        command=command,
        sub_command=sub_command,
        arguments=arguments,
        timeout_seconds=(
            timeout if timeout is not None else settings.default_timeout_seconds
        ),
        quote_arguments=quote_arguments,
    )


_DEFAULT_INVOKER = CommandInvoker()


def get_invoker() -> CommandInvoker:
    """Return shared invoker instance."""
    return _DEFAULT_INVOKER


def run(
    command: str,
    sub_command: str,
    arguments: Sequence[str] | None = None,
    timeout: float | None = None,
    *,
    quote_arguments: bool = True,
) -> str:
    return _DEFAULT_INVOKER.run(
        command, sub_command, arguments, timeout, quote_arguments=quote_arguments
    )


def run_deferred(
    command: str,
    sub_command: str,
    arguments: Sequence[str] | None = None,
    timeout: float | None = None,
    *,
    quote_arguments: bool = True,
) -> Future[str]:
    return _DEFAULT_INVOKER.run_deferred(
        command, sub_command, arguments, timeout, quote_arguments=quote_arguments
    )


async def run_async(
    command: str,
    sub_command: str,
    arguments: Sequence[str] | None = None,
    timeout: float | None = None,
    *,
    quote_arguments: bool = True,
) -> str:
    return await _DEFAULT_INVOKER.run_async(
        command, sub_command, arguments, timeout, quote_arguments=quote_arguments
    )
