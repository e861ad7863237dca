"""Flag token parsing utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import FlagError
from .models import FlagState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import Flag

__all__ = [
    "TERMINATOR",
    "expects_value",
    "find_terminator",
    "inline_value_flag",
    "is_flag_token",
    "lookup_flag",
    "parse_flags",
    "split_flag_token",
]

TERMINATOR = "--"


def is_flag_token(token: str) -> bool:
    """Check if a token looks like a flag.

    "--x..." needs at least one letter after the dashes and "-x" at least
    one letter after the dash; a lone "-" or "--" is not a flag.
    """
    if token.startswith("--"):
        return len(token) >= 3
    return len(token) >= 2 and token.startswith("-")


def split_flag_token(token: str) -> tuple[str, str | None]:
    """Split a flag token into its name and its inline value.

    E.g. "--output=json" -> ("output", "json"), "-n" -> ("n", None)
    """
    body = token.lstrip("-")
    if "=" in body:
        name, value = body.split("=", 1)
        return name, value
    return body, None


def lookup_flag(flags: Iterable[Flag], name: str) -> Flag | None:
    """Find the flag named after a single dash.

    One letter is looked up as a shorthand first, then as a long name.
    """
    flags = list(flags)
    if len(name) == 1:
        for flag in flags:
            if flag.shorthand == name:
                return flag
    return next((f for f in flags if f.name == name), None)


def expects_value(flags: Iterable[Flag], token: str) -> bool:
    """Return True if ``token`` is a flag whose value is the next token."""
    flags = list(flags)
    if "=" in token:
        return False
    if token.startswith("--"):
        name = token[2:]
        return any(f.name == name and f.takes_value for f in flags)
    # Short flags may be grouped ("-vn"): the value belongs to the first
    # value-taking letter, and is inline unless that letter comes last.
    body = token[1:]
    for pos, letter in enumerate(body):
        flag = lookup_flag(flags, letter)
        if flag is None:
            return False
        if flag.takes_value:
            return pos == len(body) - 1
    return False


def inline_value_flag(flags: Iterable[Flag], token: str) -> tuple[Flag, str] | None:
    """Return the flag receiving the "=" value of ``token``, with that value.

    E.g. "--output=js" or "-vo=js" -> (output flag, "js"). None when a
    value-taking letter of a short group comes before the "=", since the
    rest of the token is then its value.

    Raises:
        FlagError: if a flag of the token is unknown
    """
    flags = list(flags)
    if token.startswith("--"):
        name, value = split_flag_token(token)
        flag = next((f for f in flags if f.name == name), None)
        if flag is None:
            raise FlagError(f"unknown flag: --{name}")
        return flag, value or ""

    body = token[1:]
    letters, value = body.split("=", 1)
    for pos, letter in enumerate(letters):
        flag = lookup_flag(flags, letter)
        if flag is None:
            raise FlagError(f"unknown shorthand flag: '{letter}' in {token}")
        if pos == len(letters) - 1:
            return flag, value
        if flag.takes_value:
            return None
    raise FlagError(f"missing flag name in {token}")


def find_terminator(flags: Iterable[Flag], args: list[str]) -> int | None:
    """Return the index of the "--" ending flag parsing in ``args``.

    A "--" following a value-taking flag is that flag's value, not a
    terminator, as in `parse_flags`.
    """
    flags = list(flags)
    index = 0
    while index < len(args):
        token = args[index]
        if token == TERMINATOR:
            return index
        index += 1
        if is_flag_token(token) and expects_value(flags, token):
            index += 1
    return None


def _parse_short_group(flags: list[Flag], token: str, args: list[str], index: int, state: FlagState) -> int:
    """Parse "-x", "-xvalue", "-abc", "-x=value" or "-ab=value"; return the next index."""
    body = token[1:]
    for pos, letter in enumerate(body):
        flag = lookup_flag(flags, letter)
        if flag is None:
            raise FlagError(f"unknown shorthand flag: '{letter}' in {token}")
        rest = body[pos + 1 :]
        if rest.startswith("="):
            state.record(flag, rest[1:] if flag.takes_value else None)
            return index
        if not flag.takes_value:
            state.record(flag, None)
            continue
        if rest:
            state.record(flag, rest)
            return index
        if index >= len(args):
            raise FlagError(f"flag needs an argument: '{letter}' in {token}")
        state.record(flag, args[index])
        return index + 1
    return index


def parse_flags(flags: Iterable[Flag], args: list[str]) -> tuple[list[str], FlagState]:
    """Separate flags from positional arguments.

    Args:
        flags: Flags known to the command (local and inherited)
        args: Tokens following the command path

    Returns:
        Tuple of (positional arguments, flag state)

    Raises:
        FlagError: on an unknown flag or a missing value
    """
    flags = list(flags)
    positional: list[str] = []
    state = FlagState()
    index = 0
    while index < len(args):
        token = args[index]
        index += 1
        if token == TERMINATOR:
            positional.extend(args[index:])
            break
        if not is_flag_token(token):
            positional.append(token)
            continue
        if not token.startswith("--"):
            index = _parse_short_group(flags, token, args, index, state)
            continue

        name, value = split_flag_token(token)
        flag = next((f for f in flags if f.name == name), None)
        if flag is None:
            raise FlagError(f"unknown flag: --{name}")
        if value is None and flag.takes_value:
            if index >= len(args):
                raise FlagError(f"flag needs an argument: {token}")
            value = args[index]
            index += 1
        state.record(flag, value)
    return positional, state
