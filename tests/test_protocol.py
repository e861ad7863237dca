"""Tests for the completion line protocol."""

from __future__ import annotations

from io import StringIO

from shellcomp.completions import Completion, format_output, parse_output, write_output
from shellcomp.completions.protocol import format_candidate
from shellcomp.directive import Directive


class TestFormat:
    """Program side."""

    def test_lines_then_directive(self) -> None:
        """One candidate per line and the directive last."""
        completion = Completion(["file.yaml\tYAML format", "file.xml\tXML format"], Directive.NO_SPACE | Directive.NO_FILE_COMP)
        assert format_output(completion) == "file.yaml\tYAML format\nfile.xml\tXML format\n:6\n"

    def test_no_descriptions(self) -> None:
        """Descriptions are cut at the first tab."""
        completion = Completion(["a\tfirst\tand more", "b"])
        assert format_output(completion, include_descriptions=False) == "a\nb\n:0\n"

    def test_empty(self) -> None:
        """No candidate still gives a directive line."""
        assert format_output(Completion([], Directive.NO_FILE_COMP)) == ":4\n"

    def test_multiline_description(self) -> None:
        """Only the first line of a candidate is sent."""
        assert format_candidate("value\tline one\nline two", True) == "value\tline one"
        assert format_candidate("", True) == ""

    def test_write(self) -> None:
        """write_output writes the serialized answer."""
        stream = StringIO()
        write_output(Completion(["x\tdesc"], Directive.FILTER_DIRS), stream, include_descriptions=False)
        assert stream.getvalue() == "x\n:16\n"


class TestParse:
    """Mirror of what the scripts do with the answer."""

    def test_parse(self) -> None:
        """Candidates and directive are recovered."""
        result = parse_output("one\tThe first\ntwo\n:6\n")
        assert result.candidates == ["one\tThe first", "two"]
        assert result.directive == Directive.NO_SPACE | Directive.NO_FILE_COMP

    def test_colon_in_candidate(self) -> None:
        """Colons inside candidates are not the directive."""
        result = parse_output("host:8080\nurn:a:b\n:4\n")
        assert result.candidates == ["host:8080", "urn:a:b"]
        assert result.directive == Directive.NO_FILE_COMP

    def test_missing_directive(self) -> None:
        """Without a directive line the default applies."""
        result = parse_output("one\ntwo\n")
        assert result.candidates == ["one", "two"]
        assert result.directive == Directive.DEFAULT

    def test_unparsable_directive(self) -> None:
        """A non numeric directive is the default, and stays a candidate."""
        result = parse_output("one\nsee:docs\n")
        assert result.candidates == ["one", "see:docs"]
        assert result.directive == Directive.DEFAULT

    def test_unknown_bits(self) -> None:
        """Unknown directive bits are ignored."""
        assert parse_output(":96\n").directive == Directive.DEFAULT
        assert parse_output(":34\n").directive == Directive.NO_SPACE

    def test_blank_lines(self) -> None:
        """Empty lines are dropped, trailing ones too."""
        result = parse_output(["a\n", "\n", "b\n", ":0\n", "\n"])
        assert result.candidates == ["a", "b"]
        assert result.directive == Directive.DEFAULT

    def test_roundtrip_of_resolved_answer(self) -> None:
        """What the program writes is what the scripts read."""
        completion = Completion(["x\tdesc", "y:z"], Directive.FILTER_FILE_EXT)
        assert parse_output(format_output(completion)) == completion
