"""
Tests for GroupExecutor - redirection checks, builtin dispatch, launch
"""
import os

import pytest

from wish.command_parser import CommandGroup
from wish.exceptions import (
    CommandNotFoundError, RedirectionSyntaxError, RedirectTargetError
)
from wish.group_executor import GroupExecutor

from helpers import make_script


@pytest.fixture
def bin_dir(workdir, state):
    """A private search path holding one `tool` script"""
    directory = workdir / "bin"
    directory.mkdir()
    make_script(directory / "tool")
    state.path_registry.replace([str(directory)])
    return directory


@pytest.fixture
def group_executor(state, fake_engine):
    return GroupExecutor(state, engine=fake_engine)


def run(group_executor, *tokens):
    handles = []
    terminate = group_executor.execute(CommandGroup(tokens), handles)
    return terminate, handles


def test_external_command_is_launched(group_executor, fake_engine, bin_dir):
    terminate, handles = run(group_executor, "tool", "-x", "arg")
    assert terminate is False
    assert handles == fake_engine.launched
    process = handles[0]
    assert process.executable == f"{bin_dir}/tool"
    assert process.args == ["tool", "-x", "arg"]
    assert process.stdout_fd is None


def test_argv0_is_original_name(group_executor, workdir):
    make_script(workdir / "local")
    _, handles = run(group_executor, "./local")
    assert handles[0].args[0] == "./local"
    assert handles[0].executable == "./local"


def test_redirect_strips_operator_and_target(group_executor, state, bin_dir, workdir):
    _, handles = run(group_executor, "tool", "a", ">", "out.txt")
    process = handles[0]
    assert process.args == ["tool", "a"]
    assert isinstance(process.stdout_fd, int)
    assert process.stdout_fd in state.open_descriptors
    assert (workdir / "out.txt").exists()


def test_existing_target_is_truncated(group_executor, bin_dir, workdir):
    target = workdir / "out.txt"
    target.write_text("old content\n")
    run(group_executor, "tool", ">", "out.txt")
    assert target.read_text() == ""


def test_redirect_to_directory(group_executor, fake_engine, bin_dir, workdir):
    (workdir / "dir").mkdir()
    with pytest.raises(RedirectTargetError) as excinfo:
        run(group_executor, "tool", ">", "dir")
    assert excinfo.value.target == "dir"
    assert fake_engine.launched == []


@pytest.mark.skipif(os.geteuid() == 0, reason="root can write anything")
def test_redirect_to_read_only_file(group_executor, fake_engine, bin_dir, workdir):
    target = workdir / "ro.txt"
    target.write_text("keep\n")
    target.chmod(0o444)
    with pytest.raises(RedirectTargetError):
        run(group_executor, "tool", ">", "ro.txt")
    assert target.read_text() == "keep\n"
    assert fake_engine.launched == []


@pytest.mark.parametrize("tokens", [
    ("tool", ">", "a", ">", "b"),
    ("tool", ">"),
    ("tool", ">", "a", "b"),
])
def test_bad_redirect_syntax_launches_nothing(group_executor, fake_engine, bin_dir, workdir, tokens):
    with pytest.raises(RedirectionSyntaxError):
        run(group_executor, *tokens)
    assert fake_engine.launched == []
    assert not (workdir / "a").exists()


def test_unknown_command(group_executor, fake_engine, bin_dir):
    with pytest.raises(CommandNotFoundError) as excinfo:
        run(group_executor, "no-such-tool")
    assert excinfo.value.command == "no-such-tool"
    assert fake_engine.launched == []


def test_target_is_opened_before_resolution(group_executor, bin_dir, workdir):
    with pytest.raises(CommandNotFoundError):
        run(group_executor, "no-such-tool", ">", "made.txt")
    assert (workdir / "made.txt").exists()


def test_builtin_takes_precedence_and_yields_no_handle(group_executor, workdir):
    make_script(workdir / "cd")
    (workdir / "sub").mkdir()
    terminate, handles = run(group_executor, "cd", "sub")
    assert terminate is False
    assert handles == []
    assert os.getcwd() == str(workdir / "sub")


def test_bare_exit_requests_termination(group_executor):
    terminate, handles = run(group_executor, "exit")
    assert terminate is True
    assert handles == []


def test_exit_with_redirect_still_creates_target(group_executor, workdir):
    terminate, _ = run(group_executor, "exit", ">", "left-behind.txt")
    assert terminate is True
    assert (workdir / "left-behind.txt").exists()


def test_path_builtin_then_lookup(group_executor, state, bin_dir):
    run(group_executor, "path")
    assert state.search_path == ()
    with pytest.raises(CommandNotFoundError):
        run(group_executor, "tool")

    run(group_executor, "path", str(bin_dir))
    _, handles = run(group_executor, "tool")
    assert len(handles) == 1
