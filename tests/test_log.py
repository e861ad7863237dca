"""Tests for logging setup."""

from __future__ import annotations

import logging
import os
from io import StringIO
from unittest.mock import patch

from shellcomp.log import LogObjects, colorize, get_logger, init_logger, should_colorize


class TestColors:
    """ANSI color decisions."""

    def test_no_color(self) -> None:
        """NO_COLOR wins over everything."""
        with patch.dict(os.environ, {"NO_COLOR": "1", "FORCE_COLOR": "1"}):
            assert should_colorize(StringIO()) is False

    def test_force_color(self) -> None:
        """FORCE_COLOR colors even non terminals."""
        env = {k: v for k, v in os.environ.items() if k != "NO_COLOR"}
        env["FORCE_COLOR"] = "1"
        with patch.dict(os.environ, env, clear=True):
            assert should_colorize(StringIO()) is True

    def test_not_a_tty(self) -> None:
        """Plain streams are not colored."""
        env = {k: v for k, v in os.environ.items() if k not in ("NO_COLOR", "FORCE_COLOR")}
        with patch.dict(os.environ, env, clear=True):
            assert should_colorize(StringIO()) is False

    def test_colorize(self) -> None:
        """Codes are joined in one escape sequence."""
        assert colorize("text") == "text"
        assert colorize("text", "31", "1") == "\x1b[31;1mtext\x1b[0m"


class TestLogger:
    """Logger wiring."""

    def teardown_method(self) -> None:
        """Back to the session setup."""
        init_logger("/dev/null")

    def test_stream(self) -> None:
        """Warnings reach the stream, debug records do not."""
        stream = StringIO()
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            init_logger(stream=stream)
            log = get_logger("shellcomp.test.stream")
            log.debug("hidden")
            log.warning("shown")
        assert "shown" in stream.getvalue()
        assert "hidden" not in stream.getvalue()

    def test_file(self, tmp_path) -> None:
        """The debug file receives debug records."""
        path = tmp_path / "debug.log"
        init_logger(str(path), stream=StringIO())
        log = get_logger("shellcomp.test.file")
        assert log.level == logging.DEBUG
        log.debug("resolving")
        for handler in LogObjects.handlers:
            handler.flush()
        assert "[DEBUG] shellcomp.test.file :: resolving" in path.read_text()

    def test_debug_file_from_env(self, tmp_path) -> None:
        """BASH_COMP_DEBUG_FILE is used when no file is given."""
        path = tmp_path / "env.log"
        with patch.dict(os.environ, {"BASH_COMP_DEBUG_FILE": str(path)}):
            init_logger(stream=StringIO())
        assert any(isinstance(h, logging.FileHandler) for h in LogObjects.handlers)

    def test_reinit_replaces_handlers(self) -> None:
        """Handlers do not pile up."""
        init_logger(stream=StringIO())
        init_logger(stream=StringIO())
        log = get_logger("shellcomp.test.reinit")
        assert log.propagate is False
        assert log.handlers == LogObjects.handlers
        assert len([h for h in log.handlers if not isinstance(h, logging.FileHandler)]) == 1
