"""Completion directives exchanged between the program and the shell scripts.

A directive is a small bitmask written on the last line of a completion
answer (``:<int>``). The scripts test each bit with an arithmetic AND, so the
numeric values are part of the wire format and must never change.
"""

from __future__ import annotations

from enum import IntFlag
from functools import reduce

__all__ = ["Directive", "combine"]


class Directive(IntFlag):
    """Post-processing instructions for the shell."""

    DEFAULT = 0  # Let the shell apply its default file completion
    ERROR = 1  # Abort, no completion at all
    NO_SPACE = 2  # Don't add a space after the inserted candidate
    NO_FILE_COMP = 4  # Don't fall back to file completion
    FILTER_FILE_EXT = 8  # Candidates are file extensions to filter on
    FILTER_DIRS = 16  # Directories only, optionally inside the first candidate

    @classmethod
    def from_wire(cls, value: int | str) -> Directive:
        """Decode a directive read from the protocol.

        Unknown bits are dropped so newer programs keep working with older
        scripts and the other way around. Anything unparsable is DEFAULT.
        """
        try:
            number = int(value)
        except (TypeError, ValueError):
            return cls.DEFAULT
        if number < 0:
            return cls.DEFAULT
        return cls(number & _ALL_BITS)

    def normalized(self) -> Directive:
        """Return ERROR alone if it is set, since it overrides every other bit."""
        if self & Directive.ERROR:
            return Directive.ERROR
        return self

    def describe(self) -> str:
        """Human readable list of the set bits, e.g. ``NoSpace, NoFileComp``."""
        names = [name for bit, name in _WIRE_NAMES if self & bit]
        return ", ".join(names) if names else "Default"


_WIRE_NAMES = (
    (Directive.ERROR, "Error"),
    (Directive.NO_SPACE, "NoSpace"),
    (Directive.NO_FILE_COMP, "NoFileComp"),
    (Directive.FILTER_FILE_EXT, "FilterFileExt"),
    (Directive.FILTER_DIRS, "FilterDirs"),
)

_ALL_BITS = reduce(lambda acc, item: acc | int(item[0]), _WIRE_NAMES, 0)


def combine(*directives: Directive) -> Directive:
    """OR directives together, ERROR winning over everything else."""
    return reduce(lambda a, b: a | b, directives, Directive.DEFAULT).normalized()
