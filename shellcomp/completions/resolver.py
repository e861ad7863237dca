"""Completion resolution.

Given the command tree and the tokens typed so far, decide whether the
cursor is on a flag name, a flag value or a positional argument, pick the
matching candidate sources and merge their answers into one ordered
candidate list and one directive.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..commands.parsing import expects_value, find_terminator, inline_value_flag, is_flag_token, lookup_flag, parse_flags
from ..commands.tree import available_flags, available_subcommands, find_command, required_flags
from ..directive import Directive, combine
from ..log import get_logger
from ..models import ShellCompError
from .sources import (
    CommandCallback,
    CompletionRequest,
    DirectoryFilter,
    FileExtensionFilter,
    FlagCallback,
    FlagNameEnumeration,
    StaticList,
    SubcommandEnumeration,
    visible_text,
)

if TYPE_CHECKING:
    import logging

    from ..commands.models import Command, Flag
    from .sources import CandidateSource

__all__ = ["Completion", "CompletionResolver", "filter_by_prefix", "resolve"]


@dataclass
class Completion:
    """The answer to a completion request."""

    candidates: list[str] = field(default_factory=list)
    directive: Directive = Directive.DEFAULT
    command: Command | None = field(default=None, repr=False, compare=False)


def filter_by_prefix(candidates: Iterable[str], prefix: str) -> list[str]:
    """Keep the candidates whose visible text starts with ``prefix``, in order."""
    return [c for c in candidates if visible_text(c).startswith(prefix)]


class CompletionResolver:
    """Resolve completion requests against one command tree.

    The tree is only read. Everything learned about a request (flags given,
    positional arguments) lives in that request's ``FlagState``.
    """

    def __init__(self, root: Command, log: logging.Logger | None = None) -> None:
        self.root = root
        self.log = log or get_logger("shellcomp.resolver")

    def resolve(self, args: list[str], changed: Iterable[str] = ()) -> Completion:
        """Resolve a request.

        Args:
            args: Tokens after the program name; the last one is the token
                under the cursor ("" when the cursor follows a space)
            changed: Extra flag names to consider as already given

        Returns:
            The candidates and directive. Never raises for request content.
        """
        if not args:
            args = [""]
        to_complete = args[-1]
        command, remaining = find_command(self.root, args[:-1])
        flags = available_flags(command)
        self.log.debug("Completing %r for %r (args: %s)", to_complete, command.full_path, remaining)

        try:
            terminated = find_terminator(flags, remaining) is not None
            flag, remaining, to_complete = self._check_flag_completion(flags, remaining, to_complete, terminated)
            positional, state = parse_flags(flags, remaining)
        except ShellCompError as e:
            self.log.debug("No completion: %s", e)
            return Completion(command=command)
        state.changed.update(changed)
        request = CompletionRequest(command=command, args=positional, to_complete=to_complete, flags=state)

        if flag is not None:
            return self._complete_flag_value(flag, request)
        if to_complete.startswith("-") and not terminated:
            return self._complete_flag_name(flags, request)
        return self._complete_positional(request)

    @staticmethod
    def _check_flag_completion(
        flags: list[Flag], remaining: list[str], to_complete: str, terminated: bool
    ) -> tuple[Flag | None, list[str], str]:
        """Find out whether the cursor is on a flag value.

        Returns:
            Tuple of (flag whose value is being completed or None,
            tokens left for the flag parser, bare token to complete)

        Raises:
            FlagError: if ``to_complete`` is "--unknown=..." style
        """
        if terminated:
            return None, remaining, to_complete

        if is_flag_token(to_complete) and "=" in to_complete:
            inline = inline_value_flag(flags, to_complete)
            if inline is None:
                return None, remaining, to_complete
            flag, value = inline
            return flag, remaining, value

        if to_complete.startswith("-") or not remaining:
            return None, remaining, to_complete

        previous = remaining[-1]
        if not is_flag_token(previous) or not expects_value(flags, previous):
            return None, remaining, to_complete
        if previous.startswith("--"):
            flag = next(f for f in flags if f.name == previous[2:])
        else:
            # The value-taking letter of a short group is its last one
            flag = lookup_flag(flags, previous[-1])
        return flag, remaining[:-1], to_complete

    def _gather(self, source: CandidateSource, request: CompletionRequest) -> tuple[list[str], Directive]:
        """Run a source, turning any fault into an ERROR directive."""
        try:
            candidates, directive = source.candidates(request)
        except Exception:  # pylint: disable=broad-exception-caught
            self.log.exception("Completion function failed for %r", request.command.full_path)
            return [], Directive.ERROR
        directive = Directive.from_wire(directive)
        if directive & Directive.ERROR:
            return [], Directive.ERROR
        candidates = [c for c in candidates or [] if c]
        if source.filter_by_prefix:
            candidates = filter_by_prefix(candidates, request.to_complete)
        return candidates, directive

    def _complete_flag_value(self, flag: Flag, request: CompletionRequest) -> Completion:
        source: CandidateSource
        if flag.completion is not None:
            source = FlagCallback(flag)
        elif flag.choices:
            source = StaticList(flag.choices)
        elif flag.file_extensions is not None:
            source = FileExtensionFilter(flag.file_extensions)
        elif flag.subdirs_in is not None:
            source = DirectoryFilter(flag.subdirs_in)
        else:
            self.log.debug("No value completion for --%s, deferring to the shell", flag.name)
            return Completion(command=request.command)
        candidates, directive = self._gather(source, request)
        return Completion(candidates, directive, request.command)

    def _complete_flag_name(self, flags: list[Flag], request: CompletionRequest) -> Completion:
        changed = request.flags.changed
        outstanding = [f for f in required_flags(request.command, changed) if not f.hidden]
        candidates, _ = self._gather(FlagNameEnumeration(outstanding), request)
        if not candidates:
            others = [f for f in flags if not f.hidden and (f.name not in changed or f.repeatable)]
            candidates, _ = self._gather(FlagNameEnumeration(others), request)
        return Completion(candidates, Directive.DEFAULT, request.command)

    @staticmethod
    def _positional_source(command: Command) -> CandidateSource | None:
        """The static vocabulary wins over the completion function."""
        if command.valid_args:
            return StaticList(command.valid_args, command.arg_aliases)
        if command.valid_args_function is not None:
            return CommandCallback(command.valid_args_function)
        return None

    def _complete_positional(self, request: CompletionRequest) -> Completion:
        command = request.command
        # Sub-commands are not arguments: a group with max_args=0 still lists them
        args_full = command.max_args is not None and len(request.args) >= command.max_args
        if args_full and (request.args or not available_subcommands(command)):
            self.log.debug("%r takes at most %d argument(s)", command.full_path, command.max_args)
            return Completion([], Directive.NO_FILE_COMP, command)

        candidates: list[str] = []
        directive = Directive.NO_FILE_COMP if args_full else Directive.DEFAULT

        if not request.args:
            subcommands, sub_directive = self._gather(SubcommandEnumeration(command), request)
            candidates.extend(subcommands)
            directive |= sub_directive

        outstanding = [f for f in required_flags(command, request.flags.changed) if not f.hidden]
        if outstanding:
            flag_names, _ = self._gather(FlagNameEnumeration(outstanding), request)
            candidates.extend(flag_names)
            directive |= Directive.NO_FILE_COMP

        source = None if args_full else self._positional_source(command)
        if source is not None:
            values, value_directive = self._gather(source, request)
            if value_directive & Directive.ERROR:
                return Completion([], Directive.ERROR, command)
            candidates.extend(values)
            directive = combine(directive, value_directive)

        return Completion(candidates, directive, command)


def resolve(root: Command, args: list[str], changed: Iterable[str] = ()) -> Completion:
    """Resolve one completion request against ``root``.

    See `CompletionResolver.resolve`.
    """
    return CompletionResolver(root).resolve(args, changed)
