"""Shared constants for shellcomp."""

__all__ = [
    "COMPLETION_COMMAND",
    "DEBUG_FILE_ENV",
    "DESCRIPTIONS_ENV_SUFFIX",
    "MIN_DESCRIPTION_WIDTH",
    "NO_DESCRIPTIONS_FLAG",
    "REQUEST_COMMAND",
    "REQUEST_COMMAND_NO_DESC",
    "REQUEST_COMMANDS",
    "RESERVED_COLUMNS",
    "SUPPORTED_SHELLS",
]

# Hidden sub-commands the generated scripts call to obtain completions
REQUEST_COMMAND = "__complete"
REQUEST_COMMAND_NO_DESC = "__completeNoDesc"
REQUEST_COMMANDS = (REQUEST_COMMAND, REQUEST_COMMAND_NO_DESC)

# Default command printing the completion scripts
COMPLETION_COMMAND = "completion"
NO_DESCRIPTIONS_FLAG = "no-descriptions"

# Supported shells for completion generation
SUPPORTED_SHELLS = ("bash", "zsh", "fish")

# Shared between the Python side and the scripts' __<prog>_debug helpers
DEBUG_FILE_ENV = "BASH_COMP_DEBUG_FILE"

# <PROGRAM>_COMPLETION_DESCRIPTIONS toggles descriptions at request time
DESCRIPTIONS_ENV_SUFFIX = "_COMPLETION_DESCRIPTIONS"

# Bash rendering: 2 spaces and 2 parentheses around each description
RESERVED_COLUMNS = 4
MIN_DESCRIPTION_WIDTH = 8
