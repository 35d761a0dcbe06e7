"""Bounded execution of one external process with full output capture."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO

from cmdinvoke.config.settings import DEFAULT_TIMEOUT_SECONDS
from cmdinvoke.runtime.arguments import build_argument_string, build_argv
from cmdinvoke.runtime.errors import (
    CommandExitError,
    CommandLaunchError,
    CommandTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_READER_GRACE_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """One request to run an external command to completion."""

    command: str
    sub_command: str
    arguments: Sequence[str] | None = ()
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    quote_arguments: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments or ()))
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )

    @property
    def argument_line(self) -> str:
        return build_argument_string(
            self.sub_command, self.arguments, self.quote_arguments
        )

    @property
    def command_text(self) -> str:
        """Human-readable command line, used in logs and error messages."""
        return f"{self.command} {self.argument_line}".rstrip()


@dataclass(frozen=True, slots=True)
class CommandEvent:
    """Lifecycle event emitted while running a command."""

    event_type: str
    command: str
    pid: int
    timeout_seconds: float
    detail: str = ""


class _StreamAccumulator:
    """Drains one output stream line by line on its own reader thread."""

    def __init__(self, stream: IO[str], name: str) -> None:
        self._lines: list[str] = []
        self._stream = stream
        self._started = False
        self._thread = threading.Thread(
            target=self._drain,
            args=(stream,),
            name=f"cmdinvoke-{name}",
            daemon=True,
        )

    def start(self) -> None:
        self._thread.start()
        self._started = True

    def _drain(self, stream: IO[str]) -> None:
        try:
            for line in stream:
                self._lines.append(line.removesuffix("\n") + "\n")
        finally:
            stream.close()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for end of stream; return False if the reader is still alive."""
        if not self._started:
            # Never started, so nothing else owns the stream.
            self._stream.close()
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def text(self) -> str:
        return "".join(self._lines)


@dataclass(slots=True)
class _ProcessHandle:
    process: subprocess.Popen[str]
    stdout: _StreamAccumulator
    stderr: _StreamAccumulator

    def join_readers(self, timeout: float | None = None) -> bool:
        stdout_done = self.stdout.join(timeout)
        stderr_done = self.stderr.join(timeout)
        return stdout_done and stderr_done


class CommandRunner:
    """Runs one external process per call and classifies the outcome."""

    def __init__(
        self, *, reader_grace_seconds: float = DEFAULT_READER_GRACE_SECONDS
    ) -> None:
        self._reader_grace_seconds = reader_grace_seconds

    def execute(
        self,
        request: InvocationRequest,
        *,
        on_event: Callable[[CommandEvent], None] | None = None,
    ) -> str:
        """Run the request and return its complete stdout.

        Raises:
            CommandLaunchError: The process could not be started.
            CommandTimeoutError: The process was killed after the timeout.
            CommandExitError: The process exited with a non-zero status.
        """
        command_text = request.command_text
        try:
            argv = build_argv(request.command, request.argument_line)
        except ValueError as e:
            raise CommandLaunchError(command_text, str(e)) from e

        logger.debug("Running: %s", command_text)
        timed_out = False

        with self._spawn(argv, command_text) as handle:
            process = handle.process
            _emit_event(
                on_event,
                CommandEvent(
                    event_type="start",
                    command=command_text,
                    pid=process.pid,
                    timeout_seconds=request.timeout_seconds,
                ),
            )

            try:
                process.wait(timeout=request.timeout_seconds)
            except subprocess.TimeoutExpired:
                timed_out = True
                logger.warning(
                    "Command timed out after %ss: %s",
                    request.timeout_seconds,
                    command_text,
                )
                _emit_event(
                    on_event,
                    CommandEvent(
                        event_type="timeout",
                        command=command_text,
                        pid=process.pid,
                        timeout_seconds=request.timeout_seconds,
                    ),
                )
                if _kill_process(process):
                    _emit_event(
                        on_event,
                        CommandEvent(
                            event_type="kill",
                            command=command_text,
                            pid=process.pid,
                            timeout_seconds=request.timeout_seconds,
                            detail="Sent SIGKILL after timeout",
                        ),
                    )

            # Exit may be reported before the readers have seen end of stream.
            process.wait()
            drained = handle.join_readers(
                self._reader_grace_seconds if timed_out else None
            )
            if not drained:
                logger.warning(
                    "Output readers still open after kill: %s", command_text
                )

            exit_code = process.returncode
            stdout = handle.stdout.text()
            stderr = handle.stderr.text()
            _emit_event(
                on_event,
                CommandEvent(
                    event_type="exit",
                    command=command_text,
                    pid=process.pid,
                    timeout_seconds=request.timeout_seconds,
                    detail=f"exit code {exit_code}",
                ),
            )

        if timed_out:
            raise CommandTimeoutError(command_text, request.timeout_seconds)
        if exit_code != 0:
            logger.info("Command exited with %s: %s", exit_code, command_text)
            raise CommandExitError(command_text, exit_code, stderr)
        return stdout

    @contextmanager
    def _spawn(
        self, argv: list[str] | str, command_text: str
    ) -> Iterator[_ProcessHandle]:
        """Start the process and guarantee it is reaped on every exit path."""
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=os.name != "nt",
            )
        except (OSError, ValueError) as e:
            raise CommandLaunchError(command_text, str(e)) from e

        assert process.stdout is not None and process.stderr is not None
        handle: _ProcessHandle | None = None
        try:
            handle = _ProcessHandle(
                process=process,
                stdout=_StreamAccumulator(process.stdout, "stdout"),
                stderr=_StreamAccumulator(process.stderr, "stderr"),
            )
            handle.stdout.start()
            handle.stderr.start()
            yield handle
        finally:
            if process.poll() is None:
                _kill_process(process)
            process.wait()
            if handle is not None:
                handle.join_readers(self._reader_grace_seconds)


def _kill_process(process: subprocess.Popen[str]) -> bool:
    """Force-kill the process (and its group on POSIX)."""
    if process.poll() is not None:
        return False
    try:
        if os.name != "nt":
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()
    except ProcessLookupError:
        return False
    except PermissionError:
        # The child left our session; fall back to killing it alone.
        process.kill()
    return True


def _emit_event(
    on_event: Callable[[CommandEvent], None] | None,
    event: CommandEvent,
) -> None:
    if on_event is None:
        return
    on_event(event)


_DEFAULT_COMMAND_RUNNER = CommandRunner()


def get_command_runner() -> CommandRunner:
    """Return shared command runner instance."""
    return _DEFAULT_COMMAND_RUNNER
