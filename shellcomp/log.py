"""Logging setup for the completion engine.

Standard output carries the completion protocol, so every diagnostic goes
to standard error (which the shell scripts discard) and, when
``BASH_COMP_DEBUG_FILE`` is set, to that file as well, interleaved with the
scripts' own traces.
"""

import logging
import os
import sys
from typing import TextIO

from .constants import DEBUG_FILE_ENV

__all__ = [
    "LogObjects",
    "colorize",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
    "should_colorize",
]

_ESC = "\x1b["
RESET = f"{_ESC}0m"

# Level -> ANSI codes
_LEVEL_STYLES = {
    logging.WARNING: ("33", "2"),
    logging.ERROR: ("31", "2"),
    logging.CRITICAL: ("31", "1"),
}


class _DebugState:
    """Container for mutable debug state to avoid global statement."""

    value: bool = bool(os.environ.get("DEBUG"))


_debug_state = _DebugState()


def is_debug() -> bool:
    """Return the current debug state."""
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _debug_state.value = value


def should_colorize(stream: TextIO | None = None) -> bool:
    """Determine if ANSI colors should be used for the given stream.

    Respects NO_COLOR, FORCE_COLOR and TTY detection, in that order.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, *codes: str) -> str:
    """Wrap text in ANSI color codes."""
    if not codes:
        return text
    return f"{_ESC}{';'.join(codes)}m{text}{RESET}"


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []


class _ScreenLogFormatter(logging.Formatter):
    """Color warnings and errors when the stream is a terminal."""

    def __init__(self, stream: TextIO | None = None) -> None:
        log_format = r"%(name)s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        super().__init__(log_format)
        self._colors = should_colorize(stream)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        codes = _LEVEL_STYLES.get(record.levelno)
        if self._colors and codes:
            return colorize(text, *codes)
        return text


def init_logger(filename: str | None = None, force_debug: bool = False, stream: TextIO | None = None) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional file to append debug records to. Defaults to the
            value of ``BASH_COMP_DEBUG_FILE``.
        force_debug: If True, force debug level
        stream: Screen stream, standard error by default
    """
    if force_debug:
        set_debug(True)

    for handler in LogObjects.handlers:
        handler.close()
    LogObjects.handlers.clear()

    filename = filename or os.environ.get(DEBUG_FILE_ENV)
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s"))
        LogObjects.handlers.append(file_handler)

    stream = stream or sys.stderr
    stream_handler = logging.StreamHandler(stream)
    stream_handler.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    stream_handler.setFormatter(_ScreenLogFormatter(stream))
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "shellcomp", level: int | None = None) -> logging.Logger:
    """Return a named logger wired to the shared handlers.

    Args:
        name: logger's name
        level: logger's level (DEBUG when a debug file or debug mode is on)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        debug_file = any(isinstance(h, logging.FileHandler) for h in LogObjects.handlers)
        logger.setLevel(logging.DEBUG if is_debug() or debug_file else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    for handler in LogObjects.handlers:
        logger.addHandler(handler)
    return logger
