"""Completion options and environment configuration."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import DESCRIPTIONS_ENV_SUFFIX

__all__ = [
    "BOOL_FALSE_STRINGS",
    "CompletionOptions",
    "coerce_to_bool",
    "descriptions_enabled",
    "env_var_name",
]

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})

_ENV_UNSAFE = re.compile(r"[^A-Z0-9_]")


def coerce_to_bool(value: str | bool | int | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Behavior:
        - None -> default
        - Empty string -> False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") -> False
        - Any other non-empty string -> True
        - Non-string values -> bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


@dataclass
class CompletionOptions:
    """Controls the default `completion` command and descriptions."""

    disable_default_cmd: bool = False  # Don't register the `completion` command
    hidden_default_cmd: bool = False  # Register it, but hide it from completion
    disable_no_desc_flag: bool = False  # No --no-descriptions flag on the shell commands
    disable_descriptions: bool = False  # Scripts always request __completeNoDesc


def env_var_name(program_name: str, suffix: str) -> str:
    """Build an environment variable name from a program name.

    E.g. ("my-prog", "_COMPLETION_DESCRIPTIONS") -> "MY_PROG_COMPLETION_DESCRIPTIONS"
    """
    return _ENV_UNSAFE.sub("_", program_name.upper()) + suffix


def descriptions_enabled(program_name: str, requested: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Decide whether a completion answer carries descriptions.

    Args:
        program_name: Name of the root command
        requested: What the script asked for (__complete vs __completeNoDesc)
        environ: Environment to read, ``os.environ`` by default

    Returns:
        False if the script asked for no descriptions or the user turned them
        off with ``<PROGRAM>_COMPLETION_DESCRIPTIONS``
    """
    if not requested:
        return False
    environ = os.environ if environ is None else environ
    return coerce_to_bool(environ.get(env_var_name(program_name, DESCRIPTIONS_ENV_SUFFIX)), default=True)
