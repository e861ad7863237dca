"""Line protocol between the program and the shell scripts.

The program prints one candidate per line (``text`` or
``text<TAB>description``) and ends with the directive line ``:<int>``::

    file.yaml	YAML format
    file.xml	XML format
    :6

The directive is always the last line, so a candidate containing a colon
can never be mistaken for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from ..directive import Directive
from .resolver import Completion

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = ["format_candidate", "format_output", "parse_output", "write_output"]


def format_candidate(candidate: str, include_descriptions: bool) -> str:
    """Make a candidate safe for the line protocol.

    Only the first line of a multi-line candidate is kept, and the
    description is dropped when descriptions are disabled.
    """
    candidate = candidate.splitlines()[0] if candidate else ""
    if not include_descriptions:
        candidate = candidate.split("\t", 1)[0]
    return candidate


def format_output(completion: Completion, include_descriptions: bool = True) -> str:
    """Serialize a completion answer, trailing newline included."""
    lines = [format_candidate(c, include_descriptions) for c in completion.candidates]
    lines = [line for line in lines if line]
    lines.append(f":{int(completion.directive)}")
    return "\n".join(lines) + "\n"


def write_output(completion: Completion, stream: TextIO, include_descriptions: bool = True) -> None:
    """Write a completion answer to ``stream``."""
    stream.write(format_output(completion, include_descriptions))
    stream.flush()


def parse_output(text: str | Iterable[str]) -> Completion:
    """Parse a completion answer the way the shell scripts do.

    A missing or unparsable directive line is read as DEFAULT, and unknown
    directive bits are ignored.
    """
    lines = text.splitlines() if isinstance(text, str) else [line.rstrip("\n") for line in text]
    while lines and not lines[-1]:
        lines.pop()
    directive = Directive.DEFAULT
    if lines and ":" in lines[-1]:
        raw = lines[-1].rsplit(":", 1)[1]
        if raw.strip().isdigit():
            directive = Directive.from_wire(raw)
            lines.pop()
    return Completion([line for line in lines if line], directive)
