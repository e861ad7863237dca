"""Tests for flag token parsing."""

from __future__ import annotations

import pytest

from shellcomp.commands import (
    Flag,
    expects_value,
    find_terminator,
    inline_value_flag,
    is_flag_token,
    lookup_flag,
    parse_flags,
    split_flag_token,
)
from shellcomp.models import FlagError

FLAGS = [
    Flag("name", shorthand="n"),
    Flag("verbose", shorthand="v", takes_value=False),
    Flag("all", shorthand="a", takes_value=False),
    Flag("x"),
]


class TestTokens:
    """Token classification helpers."""

    @pytest.mark.parametrize("token", ["--name", "--name=value", "-n", "-vn", "-n=value"])
    def test_is_flag(self, token: str) -> None:
        """Dash prefixed tokens with a name are flags."""
        assert is_flag_token(token)

    @pytest.mark.parametrize("token", ["", "-", "--", "value", "a-b"])
    def test_is_not_flag(self, token: str) -> None:
        """Lone dashes and words are not flags."""
        assert not is_flag_token(token)

    def test_split(self) -> None:
        """Inline values are split on the first equal sign."""
        assert split_flag_token("--name=a=b") == ("name", "a=b")
        assert split_flag_token("--name=") == ("name", "")
        assert split_flag_token("-n") == ("n", None)

    def test_lookup(self) -> None:
        """Shorthand letters and long names."""
        assert lookup_flag(FLAGS, "name") is FLAGS[0]
        assert lookup_flag(FLAGS, "n") is FLAGS[0]
        assert lookup_flag(FLAGS, "x") is FLAGS[3]
        assert lookup_flag(FLAGS, "missing") is None

    def test_lookup_shorthand_first(self) -> None:
        """A shorthand wins over a one-letter long name."""
        flags = [Flag("x"), Flag("exclude", shorthand="x")]
        assert lookup_flag(flags, "x") is flags[1]
        assert lookup_flag(iter(flags), "exclude") is flags[1]

    def test_inline_value_flag(self) -> None:
        """The flag before the "=" receives the inline value."""
        assert inline_value_flag(FLAGS, "--name=a") == (FLAGS[0], "a")
        assert inline_value_flag(FLAGS, "--name=") == (FLAGS[0], "")
        assert inline_value_flag(FLAGS, "-n=a=b") == (FLAGS[0], "a=b")
        assert inline_value_flag(FLAGS, "-vn=a") == (FLAGS[0], "a")
        assert inline_value_flag(FLAGS, "-nv=a") is None

    @pytest.mark.parametrize("token", ["--nope=1", "-q=1", "-vq=1", "-=1"])
    def test_inline_value_unknown(self, token: str) -> None:
        """Unknown flags in an "=" token raise FlagError."""
        with pytest.raises(FlagError):
            inline_value_flag(FLAGS, token)

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["a", "--", "--name"], 1),
            (["-v", "--"], 1),
            (["--name", "--", "x"], None),
            (["-vn", "--"], None),
            (["--name=x", "--"], 1),
            (["a", "b"], None),
        ],
    )
    def test_find_terminator(self, args: list[str], expected: int | None) -> None:
        """A "--" consumed as a flag value is not the terminator."""
        assert find_terminator(FLAGS, args) == expected

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("--name", True),
            ("--name=value", False),
            ("--verbose", False),
            ("--n", False),
            ("-n", True),
            ("-vn", True),
            ("-nv", False),
            ("-v", False),
            ("-q", False),
            ("--unknown", False),
        ],
    )
    def test_expects_value(self, token: str, expected: bool) -> None:
        """Only a value-taking flag without inline value consumes the next token."""
        assert expects_value(FLAGS, token) is expected


class TestParseFlags:
    """Separating flags from positional arguments."""

    def test_mixed(self) -> None:
        """Flags anywhere on the line, in every form."""
        positional, state = parse_flags(FLAGS, ["a", "--name", "one", "b", "-v", "--name=two", "c"])
        assert positional == ["a", "b", "c"]
        assert state.changed == {"name", "verbose"}
        assert state.values == {"name": ["one", "two"]}
        assert state.get("name") == "two"
        assert state.get("missing", "default") == "default"

    def test_short_groups(self) -> None:
        """Grouped shorthands, with an attached or separate value."""
        _, state = parse_flags(FLAGS, ["-va", "-nfoo"])
        assert state.changed == {"verbose", "all", "name"}
        assert state.get("name") == "foo"

        _, state = parse_flags(FLAGS, ["-avn", "bar"])
        assert state.get("name") == "bar"

        _, state = parse_flags(FLAGS, ["-n=baz"])
        assert state.get("name") == "baz"

    def test_short_group_equal_form(self) -> None:
        """In a group the "=" value belongs to the letter before it."""
        _, state = parse_flags(FLAGS, ["-vn=foo"])
        assert state.changed == {"verbose", "name"}
        assert state.get("name") == "foo"

        _, state = parse_flags(FLAGS, ["-nv=foo"])
        assert state.changed == {"name"}
        assert state.get("name") == "v=foo"

    def test_terminator_as_value(self) -> None:
        """A "--" following a value-taking flag is its value."""
        positional, state = parse_flags(FLAGS, ["--name", "--", "-v"])
        assert positional == []
        assert state.get("name") == "--"
        assert state.changed == {"name", "verbose"}

    def test_terminator(self) -> None:
        """Everything after "--" is positional."""
        positional, state = parse_flags(FLAGS, ["--verbose", "--", "--name", "-v"])
        assert positional == ["--name", "-v"]
        assert state.changed == {"verbose"}

    def test_lone_dash_is_positional(self) -> None:
        """A single dash (stdin by convention) is an argument."""
        positional, _ = parse_flags(FLAGS, ["-"])
        assert positional == ["-"]

    @pytest.mark.parametrize(
        "args",
        [
            ["--unknown"],
            ["--name"],
            ["-q"],
            ["-vq"],
            ["-n"],
            ["-q=1"],
        ],
    )
    def test_errors(self, args: list[str]) -> None:
        """Unknown flags and missing values raise FlagError."""
        with pytest.raises(FlagError):
            parse_flags(FLAGS, args)
