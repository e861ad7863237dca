"""shellcomp - runtime shell completion for hierarchical command-line programs.

A program declares its commands and flags as a tree; the generated bash, zsh
and fish scripts call the program back with a hidden ``__complete`` command
and the program answers with candidates and a directive telling the shell
how to present them.
"""

from __future__ import annotations

from .commands import Command, Flag, FlagState, Invocation
from .completions import Completion, CompletionResolver, compile_script, format_output, parse_output, resolve
from .config import CompletionOptions
from .directive import Directive
from .models import CommandNotFoundError, ExitCode, FlagError, ShellCompError
from .program import add_completion_command, execute, main

__all__ = [
    "Command",
    "CommandNotFoundError",
    "Completion",
    "CompletionOptions",
    "CompletionResolver",
    "Directive",
    "ExitCode",
    "Flag",
    "FlagError",
    "FlagState",
    "Invocation",
    "ShellCompError",
    "add_completion_command",
    "compile_script",
    "execute",
    "format_output",
    "main",
    "parse_output",
    "resolve",
]
