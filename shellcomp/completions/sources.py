"""Candidate sources.

Each source turns a completion request into raw candidates plus the
directive it wants. Prefix filtering is left to the resolver, except for
sources whose candidates are instructions for the shell rather than words
to insert (file extensions, a directory name): those set
``filter_by_prefix`` to False.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Protocol

from ..commands.tree import available_subcommands
from ..directive import Directive

if TYPE_CHECKING:
    from ..commands.models import Command, CompletionFunc, Flag, FlagState

__all__ = [
    "CandidateSource",
    "CommandCallback",
    "CompletionRequest",
    "DirectoryFilter",
    "FileExtensionFilter",
    "FlagCallback",
    "FlagNameEnumeration",
    "StaticList",
    "SubcommandEnumeration",
    "visible_text",
    "with_description",
]


def with_description(text: str, description: str) -> str:
    """Join a candidate and its description with a tab, if there is one."""
    return f"{text}\t{description}" if description else text


def visible_text(candidate: str) -> str:
    """Return the part of a candidate the shell inserts (before the tab)."""
    return candidate.split("\t", 1)[0]


@dataclass
class CompletionRequest:
    """A resolved completion request."""

    command: Command  # Effective command
    args: list[str]  # Positional arguments already typed
    to_complete: str  # Token under the cursor (bare value for --flag=value)
    flags: FlagState


class CandidateSource(Protocol):
    """Something able to provide candidates for a request."""

    filter_by_prefix: ClassVar[bool]

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        """Return raw candidates and the directive for ``request``."""


@dataclass
class StaticList:
    """A fixed vocabulary, with aliases used only when nothing else matches."""

    filter_by_prefix: ClassVar[bool] = True

    values: list[str]
    aliases: list[str] = field(default_factory=list)

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        matching = [v for v in self.values if visible_text(v).startswith(request.to_complete)]
        if not matching:
            matching = [a for a in self.aliases if visible_text(a).startswith(request.to_complete)]
        return matching, Directive.NO_FILE_COMP


@dataclass
class CommandCallback:
    """Positional completion computed by the command's own function."""

    filter_by_prefix: ClassVar[bool] = True

    func: CompletionFunc

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        return self.func(request.command, list(request.args), request.to_complete)


@dataclass
class FlagCallback:
    """Value completion computed by the function registered on a flag."""

    filter_by_prefix: ClassVar[bool] = True

    flag: Flag

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        assert self.flag.completion is not None
        return self.flag.completion(request.command, list(request.args), request.to_complete)


@dataclass
class FlagNameEnumeration:
    """The long, long-with-equal and short forms of some flags."""

    filter_by_prefix: ClassVar[bool] = True

    flags: list[Flag]

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        result = []
        for flag in self.flags:
            result.extend(with_description(form, flag.usage) for form in flag.forms())
        return result, Directive.DEFAULT


@dataclass
class SubcommandEnumeration:
    """The available sub-commands of a command.

    An alias is only offered when the primary name does not match, so
    typing an alias prefix still finds the command without every alias
    cluttering the list.
    """

    filter_by_prefix: ClassVar[bool] = True

    command: Command

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        result = []
        children = available_subcommands(self.command)
        for child in children:
            if child.name.startswith(request.to_complete):
                result.append(with_description(child.name, child.short))
                continue
            result.extend(
                with_description(alias, child.short) for alias in child.aliases if alias.startswith(request.to_complete)
            )
        return result, Directive.NO_FILE_COMP if children else Directive.DEFAULT


@dataclass
class FileExtensionFilter:
    """Let the shell complete files having one of the given extensions."""

    filter_by_prefix: ClassVar[bool] = False

    extensions: list[str]

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        if not self.extensions:
            return [], Directive.DEFAULT
        return list(self.extensions), Directive.FILTER_FILE_EXT


@dataclass
class DirectoryFilter:
    """Let the shell complete directories, inside ``subdir`` if given."""

    filter_by_prefix: ClassVar[bool] = False

    subdir: str = ""

    def candidates(self, request: CompletionRequest) -> tuple[list[str], Directive]:
        return ([self.subdir] if self.subdir else []), Directive.FILTER_DIRS
