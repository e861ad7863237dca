"""Command tree: models, traversal and flag parsing."""

from __future__ import annotations

from .models import Command, CompletionFunc, Flag, FlagState, Invocation, RunFunc
from .parsing import (
    expects_value,
    find_terminator,
    inline_value_flag,
    is_flag_token,
    lookup_flag,
    parse_flags,
    split_flag_token,
)
from .tree import available_flags, available_subcommands, find_command, required_flags

__all__ = [
    "Command",
    "CompletionFunc",
    "Flag",
    "FlagState",
    "Invocation",
    "RunFunc",
    "available_flags",
    "available_subcommands",
    "expects_value",
    "find_command",
    "find_terminator",
    "inline_value_flag",
    "is_flag_token",
    "lookup_flag",
    "parse_flags",
    "required_flags",
    "split_flag_token",
]
