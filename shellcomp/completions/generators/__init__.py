"""Shell completion script generators.

Each generator turns a program name into a script which, once loaded by the
shell, calls the program back with the hidden completion request command.
"""

from __future__ import annotations

from collections.abc import Callable

from ...constants import SUPPORTED_SHELLS
from ...models import ShellCompError
from .bash import generate_bash
from .common import ScriptContext
from .fish import generate_fish
from .zsh import generate_zsh

__all__ = ["GENERATORS", "ScriptContext", "compile_script", "generate_bash", "generate_fish", "generate_zsh"]

GENERATORS: dict[str, Callable[[str, bool], str]] = {
    "bash": generate_bash,
    "zsh": generate_zsh,
    "fish": generate_fish,
}


def compile_script(program_name: str, include_descriptions: bool, dialect: str) -> str:
    """Generate the completion script for ``program_name`` in a shell dialect.

    Args:
        program_name: Name the program is invoked with
        include_descriptions: Ask the program for candidate descriptions
        dialect: One of "bash", "zsh" or "fish"

    Raises:
        ShellCompError: if the dialect is not supported
    """
    if dialect not in GENERATORS:
        msg = f"Unsupported shell: {dialect}. Supported: {', '.join(SUPPORTED_SHELLS)}"
        raise ShellCompError(msg)
    return GENERATORS[dialect](program_name, include_descriptions)
