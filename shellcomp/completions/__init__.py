"""Shell completion for command trees.

This package provides:
- Candidate sources and the resolver deciding what completes a command line
- The line protocol spoken with the shell scripts
- Shell-specific completion script generators (bash, zsh, fish)
- Handlers for the hidden request commands and the `completion` command
"""

from __future__ import annotations

from .generators import GENERATORS, compile_script
from .handlers import handle_compgen, handle_completion_request
from .protocol import format_output, parse_output, write_output
from .resolver import Completion, CompletionResolver, filter_by_prefix, resolve
from .sources import (
    CandidateSource,
    CommandCallback,
    CompletionRequest,
    DirectoryFilter,
    FileExtensionFilter,
    FlagCallback,
    FlagNameEnumeration,
    StaticList,
    SubcommandEnumeration,
    with_description,
)

__all__ = [
    "GENERATORS",
    "CandidateSource",
    "CommandCallback",
    "Completion",
    "CompletionRequest",
    "CompletionResolver",
    "DirectoryFilter",
    "FileExtensionFilter",
    "FlagCallback",
    "FlagNameEnumeration",
    "StaticList",
    "SubcommandEnumeration",
    "compile_script",
    "filter_by_prefix",
    "format_output",
    "handle_compgen",
    "handle_completion_request",
    "parse_output",
    "resolve",
    "with_description",
    "write_output",
]
