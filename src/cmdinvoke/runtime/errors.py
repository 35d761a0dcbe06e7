"""Failure kinds raised by command invocations."""

from __future__ import annotations


class CommandInvocationError(RuntimeError):
    """Base class for every classified invocation failure."""

    retryable = False

    def __init__(self, command: str, message: str) -> None:
        super().__init__(message)
        self.command = command

    @property
    def detail(self) -> str:
        return ""


class CommandTimeoutError(CommandInvocationError):
    """The process outlived its timeout and was forcibly terminated."""

    retryable = True

    def __init__(self, command: str, timeout_seconds: float) -> None:
        super().__init__(
            command, f"Command timed out after {timeout_seconds:g}s: {command}"
        )
        self.timeout_seconds = timeout_seconds


class CommandExitError(CommandInvocationError):
    """The process exited on its own with a non-zero status."""

    def __init__(self, command: str, exit_code: int, stderr: str) -> None:
        super().__init__(
            command, f"Command failed with exit code {exit_code}: {command}"
        )
        self.exit_code = exit_code
        self.stderr = stderr

    @property
    def detail(self) -> str:
        return self.stderr


class CommandLaunchError(CommandInvocationError):
    """The process could not be started at all."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(command, f"Failed to launch {command}: {reason}")
        self.reason = reason

    @property
    def detail(self) -> str:
        return self.reason
