"""Tests for command tree traversal."""

import pytest

from shellcomp.commands import Command, Flag, available_flags, available_subcommands, find_command, required_flags


def _tree():
    root = Command(
        "prog",
        flags=[
            Flag("config", shorthand="c", persistent=True),
            Flag("debug", takes_value=False, persistent=True),
            Flag("local-only"),
        ],
    )
    remote = Command("remote", aliases=["rem"], flags=[Flag("debug", usage="remote debug", takes_value=False)])
    remote.add_command(Command("add", flags=[Flag("name", required=True)]), Command("remove", aliases=["rm"]))
    root.add_command(remote, Command("hidden", hidden=True), Command("old", deprecated="gone"))
    return root


def test_parent_links():
    """Children know their parent and their path."""
    root = _tree()
    add = root.children["remote"].children["add"]
    assert add.parent is root.children["remote"]
    assert add.root is root
    assert add.full_path == "prog remote add"


def test_children_from_constructor():
    """Children given to the constructor get their parent too."""
    child = Command("child")
    root = Command("root", children={"child": child})
    assert child.parent is root


def test_available_flags_inherit_persistent():
    """Persistent ancestor flags are inherited, local ones are not."""
    root = _tree()
    add = root.children["remote"].children["add"]
    assert [f.name for f in available_flags(add)] == ["config", "debug", "name"]
    assert [f.name for f in available_flags(root)] == ["config", "debug", "local-only"]


def test_local_flag_shadows_inherited():
    """A local flag wins over an inherited one with the same name."""
    root = _tree()
    remote = root.children["remote"]
    debug = next(f for f in available_flags(remote) if f.name == "debug")
    assert debug.usage == "remote debug"


def test_required_flags():
    """Required flags not yet given."""
    root = _tree()
    add = root.children["remote"].children["add"]
    assert [f.name for f in required_flags(add, set())] == ["name"]
    assert required_flags(add, {"name"}) == []


def test_available_subcommands():
    """Hidden and deprecated commands are left out."""
    root = _tree()
    assert [c.name for c in available_subcommands(root)] == ["remote"]


def test_find_command():
    """Sub-command names and aliases are followed."""
    root = _tree()
    cmd, remaining = find_command(root, ["remote", "add", "origin"])
    assert cmd.full_path == "prog remote add"
    assert remaining == ["origin"]

    cmd, remaining = find_command(root, ["rem", "rm", "x"])
    assert cmd.full_path == "prog remote remove"
    assert remaining == ["x"]


def test_find_command_skips_flags():
    """Flags and their values do not stop the walk."""
    root = _tree()
    cmd, remaining = find_command(root, ["--config", "remote", "--debug", "remote", "add"])
    assert cmd.full_path == "prog remote add"
    assert remaining == ["--config", "remote", "--debug"]

    cmd, remaining = find_command(root, ["-c", "file", "remote"])
    assert cmd.full_path == "prog remote"
    assert remaining == ["-c", "file"]


def test_find_command_stops():
    """An unknown word or the terminator ends the walk."""
    root = _tree()
    cmd, remaining = find_command(root, ["unknown", "remote"])
    assert cmd is root
    assert remaining == ["unknown", "remote"]

    cmd, remaining = find_command(root, ["remote", "--", "add"])
    assert cmd.full_path == "prog remote"
    assert remaining == ["--", "add"]


def test_register_flag_completion():
    """Only flags declared on the command can get a completion function."""
    root = _tree()

    def func(*_):
        return [], 0

    root.register_flag_completion("config", func)
    assert root.flags[0].completion is func
    with pytest.raises(KeyError):
        root.register_flag_completion("missing", func)


def test_flag_forms():
    """Long, long with equal sign and shorthand forms."""
    assert Flag("name", shorthand="n").forms() == ["--name", "--name=", "-n"]
    assert Flag("quiet", takes_value=False).forms() == ["--quiet"]
