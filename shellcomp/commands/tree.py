"""Command tree traversal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .parsing import TERMINATOR, expects_value, is_flag_token

if TYPE_CHECKING:
    from .models import Command, Flag

__all__ = ["available_flags", "available_subcommands", "find_command", "required_flags"]


def available_flags(command: Command) -> list[Flag]:
    """Return the flags usable on ``command``, sorted by name.

    These are the command's own flags plus the persistent flags of its
    ancestors. A local flag shadows an inherited one with the same name.
    """
    seen: dict[str, Flag] = {}
    node: Command | None = command
    local = True
    while node is not None:
        for flag in node.flags:
            if flag.name in seen:
                continue
            if local or flag.persistent:
                seen[flag.name] = flag
        node = node.parent
        local = False
    return sorted(seen.values(), key=lambda f: f.name)


def required_flags(command: Command, changed: set[str] | frozenset[str]) -> list[Flag]:
    """Return the required flags of ``command`` that were not given yet."""
    return [flag for flag in available_flags(command) if flag.required and flag.name not in changed]


def available_subcommands(command: Command) -> list[Command]:
    """Return the sub-commands that can be offered, in declaration order."""
    return [child for child in command.children.values() if child.is_available()]


def find_command(root: Command, tokens: list[str]) -> tuple[Command, list[str]]:
    """Walk the tree following the sub-command names found in ``tokens``.

    Flags (and the values of value-taking flags) are skipped while walking.
    The first token that does not name a sub-command ends the walk, as does
    the "--" terminator.

    Args:
        root: The root command
        tokens: Command line tokens, without the program name

    Returns:
        Tuple of (deepest matched command, tokens minus the sub-command names)
    """
    command = root
    remaining: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if token == TERMINATOR:
            remaining.extend(tokens[index - 1 :])
            break
        if is_flag_token(token):
            remaining.append(token)
            if index < len(tokens) and expects_value(available_flags(command), token):
                remaining.append(tokens[index])
                index += 1
            continue
        child = command.find_child(token)
        if child is None:
            remaining.extend(tokens[index - 1 :])
            break
        command = child
    return command, remaining
