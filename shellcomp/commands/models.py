"""Data models for the command tree."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ..directive import Directive

__all__ = ["Command", "CompletionFunc", "Flag", "FlagState", "Invocation", "RunFunc"]

# (command, positional args, to_complete) -> (candidates, directive)
CompletionFunc = Callable[["Command", list[str], str], "tuple[list[str], Directive]"]
RunFunc = Callable[["Invocation"], "int | None"]


@dataclass
class Flag:
    """A flag definition.

    Only ``name`` is mandatory; a flag takes a value unless ``takes_value``
    is False (a boolean switch).
    """

    name: str  # Long name, without the leading "--"
    shorthand: str = ""  # Single letter, without the leading "-"
    usage: str = ""  # Used as the completion description
    takes_value: bool = True
    required: bool = False
    persistent: bool = False  # Inherited by every descendant command
    hidden: bool = False
    repeatable: bool = False  # Still offered after it was given once
    choices: list[str] = field(default_factory=list)  # Static value vocabulary
    completion: CompletionFunc | None = None  # Dynamic value completion
    file_extensions: list[str] | None = None  # Value is a file with one of these extensions
    subdirs_in: str | None = None  # Value is a directory ("" for the current one)

    def forms(self) -> list[str]:
        """Return the tokens a user can type to name this flag."""
        result = [f"--{self.name}"]
        if self.takes_value:
            result.append(f"--{self.name}=")
        if self.shorthand:
            result.append(f"-{self.shorthand}")
        return result


@dataclass(eq=False)
class Command:
    """A node of the command tree.

    A command can be runnable (``run``), a group (``children``) or both.
    """

    name: str
    short: str = ""
    aliases: list[str] = field(default_factory=list)
    hidden: bool = False
    deprecated: str = ""  # Deprecation message; deprecated commands are not offered
    max_args: int | None = None  # None means unlimited
    valid_args: list[str] = field(default_factory=list)  # Static positional vocabulary
    arg_aliases: list[str] = field(default_factory=list)  # Offered when no valid_args entry matches
    valid_args_function: CompletionFunc | None = None
    flags: list[Flag] = field(default_factory=list)
    run: RunFunc | None = None
    children: dict[str, Command] = field(default_factory=dict)
    parent: Command | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children.values():
            child.parent = self

    def add_command(self, *commands: Command) -> None:
        """Attach sub-commands, keeping insertion order."""
        for cmd in commands:
            cmd.parent = self
            self.children[cmd.name] = cmd

    def add_flag(self, flag: Flag) -> Flag:
        """Declare a flag on this command."""
        self.flags.append(flag)
        return flag

    def register_flag_completion(self, name: str, func: CompletionFunc) -> None:
        """Attach a value completion callback to a flag declared on this command.

        Raises:
            KeyError: if no such flag is declared
        """
        for flag in self.flags:
            if flag.name == name:
                flag.completion = func
                return
        raise KeyError(name)

    def matches(self, token: str) -> bool:
        """Return True if ``token`` names this command or one of its aliases."""
        return token == self.name or token in self.aliases

    def find_child(self, token: str) -> Command | None:
        """Return the sub-command named by ``token``, if any."""
        child = self.children.get(token)
        if child is not None:
            return child
        for child in self.children.values():
            if child.matches(token):
                return child
        return None

    def is_available(self) -> bool:
        """Return True if the command should be offered as a completion."""
        return not self.hidden and not self.deprecated

    @property
    def root(self) -> Command:
        """Return the root of the tree."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def full_path(self) -> str:
        """Space separated path from the root, e.g. ``prog remote add``."""
        parts = []
        node: Command | None = self
        while node is not None:
            parts.append(node.name)
            node = node.parent
        return " ".join(reversed(parts))


@dataclass
class FlagState:
    """Flags seen on one command line. Built fresh for every request."""

    changed: set[str] = field(default_factory=set)  # Long names
    values: dict[str, list[str]] = field(default_factory=dict)

    def record(self, flag: Flag, value: str | None) -> None:
        """Mark ``flag`` as given, with its value if it takes one."""
        self.changed.add(flag.name)
        if value is not None:
            self.values.setdefault(flag.name, []).append(value)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the last value given for ``name``."""
        values = self.values.get(name)
        return values[-1] if values else default


@dataclass
class Invocation:
    """What a command's ``run`` callable receives."""

    command: Command
    args: list[str]
    flags: FlagState
    stdout: TextIO = field(default_factory=lambda: sys.stdout, repr=False)
    stderr: TextIO = field(default_factory=lambda: sys.stderr, repr=False)
