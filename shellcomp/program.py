"""Program entry point: completion requests, the `completion` command and normal runs."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .commands.models import Command, Flag, Invocation
from .commands.parsing import parse_flags
from .commands.tree import available_flags, find_command
from .completions.handlers import handle_compgen, handle_completion_request
from .config import CompletionOptions
from .constants import COMPLETION_COMMAND, NO_DESCRIPTIONS_FLAG, REQUEST_COMMAND, REQUEST_COMMANDS, SUPPORTED_SHELLS
from .directive import Directive
from .log import get_logger, init_logger
from .models import CommandNotFoundError, ExitCode, ShellCompError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .commands.models import RunFunc

__all__ = ["add_completion_command", "execute", "main"]


def _no_file_completion(_command: Command, _args: list[str], _to_complete: str) -> tuple[list[str], Directive]:
    return [], Directive.NO_FILE_COMP


def _script_runner(dialect: str, options: CompletionOptions) -> RunFunc:
    def run(invocation: Invocation) -> int:
        no_desc = NO_DESCRIPTIONS_FLAG in invocation.flags.changed
        include_descriptions = not options.disable_descriptions and not no_desc
        program_name = invocation.command.root.name
        return handle_compgen(program_name, dialect, include_descriptions, invocation.stdout, invocation.stderr)

    return run


def add_completion_command(root: Command, options: CompletionOptions | None = None) -> Command | None:
    """Add the default ``completion <shell>`` command to ``root``.

    Nothing is added when the options disable it, when ``root`` has no
    sub-commands (a new child would hide its positional arguments) or when
    the program already defines a ``completion`` command.

    Returns:
        The added command, or None
    """
    options = options or CompletionOptions()
    if options.disable_default_cmd or not root.children or COMPLETION_COMMAND in root.children:
        return None

    group = Command(
        COMPLETION_COMMAND,
        short="Generate the autocompletion script for the specified shell",
        hidden=options.hidden_default_cmd,
        max_args=0,
        valid_args_function=_no_file_completion,
    )
    for dialect in SUPPORTED_SHELLS:
        shell_cmd = Command(
            dialect,
            short=f"Generate the autocompletion script for {dialect}",
            max_args=0,
            valid_args_function=_no_file_completion,
            run=_script_runner(dialect, options),
        )
        if not options.disable_descriptions and not options.disable_no_desc_flag:
            shell_cmd.add_flag(Flag(NO_DESCRIPTIONS_FLAG, usage="disable completion descriptions", takes_value=False))
        group.add_command(shell_cmd)
    root.add_command(group)
    return group


def _run(root: Command, argv: list[str], stdout: TextIO, stderr: TextIO) -> ExitCode:
    """Run the command named by ``argv``."""
    log = get_logger("shellcomp.program")
    command, remaining = find_command(root, argv)
    try:
        args, flags = parse_flags(available_flags(command), remaining)
        if command.run is None:
            if args:
                raise CommandNotFoundError(f'unknown command "{args[0]}" for "{command.full_path}"')
            raise CommandNotFoundError(f'"{command.full_path}" requires a sub-command')
        if command.max_args is not None and len(args) > command.max_args:
            msg = f'"{command.full_path}" accepts at most {command.max_args} argument(s), received {len(args)}'
            raise ShellCompError(msg)
    except ShellCompError as e:
        stderr.write(f"Error: {e}\n")
        return ExitCode.USAGE_ERROR

    if command.deprecated:
        log.warning('Command "%s" is deprecated, %s', command.full_path, command.deprecated)

    try:
        result = command.run(Invocation(command=command, args=args, flags=flags, stdout=stdout, stderr=stderr))
    except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
        log.debug("%s failed", command.full_path, exc_info=True)
        stderr.write(f"Error: {e}\n")
        return ExitCode.COMMAND_ERROR
    if not result:
        return ExitCode.SUCCESS
    return result if isinstance(result, ExitCode) else ExitCode.COMMAND_ERROR


def execute(
    root: Command,
    argv: Sequence[str] | None = None,
    options: CompletionOptions | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> ExitCode:
    """Run a program built from ``root``.

    The hidden request commands are answered before anything else; any
    other command line runs the command it names.

    Args:
        root: The root command
        argv: Command line without the program name, ``sys.argv[1:]`` by default
        options: Controls the default ``completion`` command
        stdout: Output stream, standard output by default
        stderr: Error stream, standard error by default

    Returns:
        The exit code
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    init_logger(stream=stderr)
    add_completion_command(root, options)

    if argv and argv[0] in REQUEST_COMMANDS:
        return handle_completion_request(root, argv[1:], argv[0] == REQUEST_COMMAND, stdout, stderr)
    return _run(root, argv, stdout, stderr)


def main(root: Command, options: CompletionOptions | None = None) -> None:
    """Run the program and exit with its exit code."""
    sys.exit(execute(root, options=options))
