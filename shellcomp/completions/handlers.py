"""Handlers for the completion request commands and the script command."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from ..config import descriptions_enabled
from ..log import get_logger
from ..models import ExitCode, ShellCompError
from .generators import compile_script
from .protocol import write_output
from .resolver import CompletionResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..commands.models import Command

__all__ = ["handle_compgen", "handle_completion_request"]


def handle_completion_request(
    root: Command,
    args: list[str],
    include_descriptions: bool,
    stdout: TextIO,
    stderr: TextIO,
    changed: Iterable[str] = (),
) -> ExitCode:
    """Answer a ``__complete`` / ``__completeNoDesc`` request.

    Args:
        root: The root command
        args: Tokens following the request command; the last one is the
            token under the cursor
        include_descriptions: False for ``__completeNoDesc``
        stdout: Receives the protocol answer
        stderr: Receives the diagnostic line, discarded by the scripts
        changed: Flag names to consider as already given

    Returns:
        Always SUCCESS: a failed resolution is reported through the directive
    """
    include_descriptions = descriptions_enabled(root.name, include_descriptions)
    completion = CompletionResolver(root).resolve(list(args), changed)
    write_output(completion, stdout, include_descriptions)
    stderr.write(f"Completion ended with directive: {completion.directive.describe()}\n")
    stderr.flush()
    return ExitCode.SUCCESS


def handle_compgen(program_name: str, dialect: str, include_descriptions: bool, stdout: TextIO, stderr: TextIO) -> ExitCode:
    """Print the completion script for ``dialect``.

    The script is only printed; installing it is left to the user.

    Returns:
        SUCCESS, or USAGE_ERROR for an unsupported dialect
    """
    log = get_logger("shellcomp.compgen")
    try:
        content = compile_script(program_name, include_descriptions, dialect)
    except ShellCompError as e:
        stderr.write(f"Error: {e}\n")
        return ExitCode.USAGE_ERROR
    log.debug("Generated %s completion script for %s", dialect, program_name)
    stdout.write(content)
    stdout.flush()
    return ExitCode.SUCCESS
