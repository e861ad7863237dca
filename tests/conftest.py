" generic fixtures "
from __future__ import annotations

import pytest

from shellcomp.commands import Command, Flag
from shellcomp.directive import Directive

from .testtools import empty_run, prefixed, valid_args_func, valid_args_func2


def pytest_configure():
    "Runs once before all"
    from shellcomp.log import init_logger

    init_logger("/dev/null")


@pytest.fixture
def child_cmds_root() -> Command:
    "Root with two children, each completing its first argument"
    root = Command("root", max_args=0, run=empty_run)
    root.add_command(
        Command("child1", short="First child", valid_args_function=valid_args_func, run=empty_run),
        Command("child2", short="Second child", valid_args_function=valid_args_func2, run=empty_run),
    )
    return root


@pytest.fixture
def flag_names_root() -> Command:
    "Root with a local flag, a persistent bool flag and a child with its own flag"
    root = Command("root", run=empty_run)
    root.add_command(Command("childCmd", run=empty_run, flags=[Flag("subFlag", usage="sub flag")]))
    root.add_flag(Flag("first", shorthand="f", usage="first flag"))
    root.add_flag(Flag("second", shorthand="s", usage="second flag", takes_value=False, persistent=True))
    return root


@pytest.fixture
def required_flags_root() -> Command:
    "Root with required local and persistent flags, and a child with its own required flag"
    root = Command("root", valid_args=["realArg"], run=empty_run)
    child = Command(
        "childCmd",
        valid_args_function=lambda _cmd, _args, _to_complete: (["subArg"], Directive.NO_FILE_COMP),
        run=empty_run,
    )
    root.add_command(child)

    root.add_flag(Flag("requiredFlag", shorthand="r", usage="required flag", required=True))
    root.add_flag(Flag("requiredPersistent", shorthand="p", usage="required persistent", required=True, persistent=True))
    root.add_flag(Flag("release", shorthand="R", usage="Release name"))

    child.add_flag(Flag("subRequired", shorthand="s", usage="sub required flag", takes_value=False, required=True))
    child.add_flag(Flag("subNotRequired", shorthand="n", usage="sub not required flag", takes_value=False))
    return root


@pytest.fixture
def flag_values_root() -> Command:
    "Root whose flags complete their values in different ways"
    root = Command("root", run=empty_run)
    root.add_flag(Flag("introot", shorthand="i", usage="help message for flag introot"))
    root.add_flag(Flag("filename", usage="Enter a filename"))
    root.add_flag(Flag("output", shorthand="o", usage="Output format", choices=["json", "yaml", "table"]))
    root.add_flag(Flag("config", usage="Configuration file", file_extensions=["yaml", "yml"]))
    root.add_flag(Flag("any-file", usage="Any file", file_extensions=[]))
    root.add_flag(Flag("theme", usage="Theme directory", subdirs_in="themes"))
    root.add_flag(Flag("workdir", usage="Working directory", subdirs_in=""))
    root.add_flag(Flag("verbose", shorthand="v", usage="Verbose output", takes_value=False))
    root.add_flag(Flag("plain", usage="Value without completion"))

    root.register_flag_completion(
        "introot",
        lambda _cmd, _args, to_complete: (
            prefixed(["1\tThe first", "2\tThe second", "10\tThe tenth"], to_complete),
            Directive.DEFAULT,
        ),
    )
    root.register_flag_completion(
        "filename",
        lambda _cmd, _args, to_complete: (
            prefixed(["file.yaml\tYAML format", "myfile.json\tJSON format", "file.xml\tXML format"], to_complete),
            Directive.NO_SPACE | Directive.NO_FILE_COMP,
        ),
    )
    return root
