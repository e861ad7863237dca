"""Pieces shared by every script generator.

The generators only differ in syntax: what each directive bit means, how the
program is re-invoked and which names the script defines all come from
`ScriptContext`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...constants import DEBUG_FILE_ENV, MIN_DESCRIPTION_WIDTH, REQUEST_COMMAND, REQUEST_COMMAND_NO_DESC, RESERVED_COLUMNS
from ...directive import Directive

__all__ = ["DIRECTIVE_VARIABLES", "ScriptContext", "render"]

# Shell variable name -> directive bit, declared at the top of every script
DIRECTIVE_VARIABLES: tuple[tuple[str, Directive], ...] = (
    ("shellCompDirectiveError", Directive.ERROR),
    ("shellCompDirectiveNoSpace", Directive.NO_SPACE),
    ("shellCompDirectiveNoFileComp", Directive.NO_FILE_COMP),
    ("shellCompDirectiveFilterFileExt", Directive.FILTER_FILE_EXT),
    ("shellCompDirectiveFilterDirs", Directive.FILTER_DIRS),
)

_PLACEHOLDER = re.compile(r"@@(\w+)@@")
_UNSAFE_IDENT = re.compile(r"[^A-Za-z0-9_]")


def render(template: str, **values: str | int) -> str:
    """Replace every ``@@NAME@@`` placeholder of ``template``.

    Shell scripts are full of braces, dollars and percent signs, so a
    dedicated placeholder syntax keeps the templates verbatim shell code.

    Raises:
        KeyError: if the template uses a placeholder with no value
    """
    return _PLACEHOLDER.sub(lambda m: str(values[m.group(1)]), template)


@dataclass(frozen=True)
class ScriptContext:
    """Everything a generator needs to know about the target program."""

    program_name: str
    include_descriptions: bool = True

    @property
    def func_name(self) -> str:
        """Program name usable inside shell function and variable names."""
        return _UNSAFE_IDENT.sub("_", self.program_name)

    @property
    def request_command(self) -> str:
        """Hidden sub-command the script calls."""
        return REQUEST_COMMAND if self.include_descriptions else REQUEST_COMMAND_NO_DESC

    def declare_directives(self, line_template: str, indent: str = "    ") -> str:
        """Declare one shell variable per directive bit.

        Args:
            line_template: e.g. ``"local @@NAME@@=@@VALUE@@"``
            indent: prefix for every line but the first
        """
        lines = [render(line_template, NAME=name, VALUE=int(bit)) for name, bit in DIRECTIVE_VARIABLES]
        return f"\n{indent}".join(lines)

    def values(self, line_template: str) -> dict[str, str | int]:
        """Placeholder values common to every template."""
        return {
            "PROG": self.program_name,
            "FUNC": self.func_name,
            "REQUEST_CMD": self.request_command,
            "DEBUG_FILE_ENV": DEBUG_FILE_ENV,
            "DIRECTIVES": self.declare_directives(line_template),
            "RESERVED_COLUMNS": RESERVED_COLUMNS,
            "MIN_DESC": MIN_DESCRIPTION_WIDTH,
        }
