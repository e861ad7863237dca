"""Error types and exit codes."""

from enum import IntEnum

__all__ = [
    "CommandNotFoundError",
    "ExitCode",
    "FlagError",
    "ShellCompError",
]


class ShellCompError(Exception):
    """Base class for errors raised by the command tree layer."""


class FlagError(ShellCompError):
    """Unknown flag, or a value-taking flag without its value."""


class CommandNotFoundError(ShellCompError):
    """The typed tokens do not lead to a runnable command."""


class ExitCode(IntEnum):
    """Exit codes returned by `execute`."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Unknown command or flag, missing arguments
    COMMAND_ERROR = 4  # The command's run callable failed
