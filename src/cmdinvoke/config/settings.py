"""Environment-resolved settings for cmdinvoke."""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
TIMEOUT_ENV_KEY = "CMDINVOKE_TIMEOUT"


@dataclass(frozen=True, slots=True)
class CommandPathSetting:
    """Where to look up a tool's executable path."""

    name: str
    env_key: str
    default_path: str


COMMAND_PATH_SETTINGS: dict[str, CommandPathSetting] = {
    "aws": CommandPathSetting(
        name="aws",
        env_key="COMMAND_AWS",
        default_path="/usr/local/bin/aws",
    ),
    "git": CommandPathSetting(
        name="git",
        env_key="COMMAND_GIT",
        default_path="/usr/bin/git",
    ),
}


class Settings:
    """Process-lifetime settings, resolved lazily from the environment."""

    def __init__(
        self, command_paths: dict[str, CommandPathSetting] | None = None
    ) -> None:
        self._command_paths = command_paths or COMMAND_PATH_SETTINGS
        self._resolved: dict[str, str] = {}

    @property
    def command_names(self) -> list[str]:
        return sorted(self._command_paths)

    def command_setting(self, name: str) -> CommandPathSetting:
        """Return the lookup rule for a registered tool (KeyError if unknown)."""
        return self._command_paths[name]

    def command_path(self, name: str) -> str:
        """Get a tool's path from its env var, falling back to the default.

        The first resolution is cached for the rest of the process.
        """
        cached = self._resolved.get(name)
        if cached:
            return cached

        setting = self.command_setting(name)
        path = os.environ.get(setting.env_key, "")
        if not path:
            path = setting.default_path
        logger.debug("Resolved %s command path: %s", name, path)
        self._resolved[name] = path
        return path

    def resolve_command(self, name_or_path: str) -> str:
        """Map a registered tool name to its path; pass anything else through."""
        if name_or_path in self._command_paths:
            return self.command_path(name_or_path)
        return name_or_path

    @property
    def aws_command(self) -> str:
        return self.command_path("aws")

    @property
    def git_command(self) -> str:
        return self.command_path("git")

    @property
    def default_timeout_seconds(self) -> float:
        """Get the default invocation timeout.

        Priority: CMDINVOKE_TIMEOUT env var > 30 seconds. Values that do not
        parse as a positive number are ignored.
        """
        raw_value = os.environ.get(TIMEOUT_ENV_KEY, "")
        if not raw_value:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            value = float(raw_value)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", TIMEOUT_ENV_KEY, raw_value)
            return DEFAULT_TIMEOUT_SECONDS
        if value <= 0:
            return DEFAULT_TIMEOUT_SECONDS
        return value

    def clear_cache(self) -> None:
        """Forget resolved command paths."""
        self._resolved.clear()


# Global settings instance
settings = Settings()
