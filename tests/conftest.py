"""
Shared fixtures for the wish test suite

Every test runs inside its own tmp_path as cwd, so relative redirect targets
and `./script` commands never touch the repository.
"""
import io

import pytest

from wish.command_executor import CommandExecutor
from wish.shell_state import ShellState

from helpers import SEARCH_PATH, RecordingEngine


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Run each test with tmp_path as cwd (restored afterwards)"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def state():
    shell_state = ShellState(search_path=SEARCH_PATH)
    yield shell_state
    shell_state.close()


@pytest.fixture
def errors():
    return io.StringIO()


@pytest.fixture
def fake_engine():
    return RecordingEngine()


@pytest.fixture
def real_engine():
    engine = RecordingEngine(real=True)
    yield engine
    for process in engine.launched:
        if process.poll() is None:
            process.wait()


@pytest.fixture
def executor(state, fake_engine, errors):
    return CommandExecutor(state, engine=fake_engine, error_stream=errors)


@pytest.fixture
def real_executor(state, real_engine, errors):
    return CommandExecutor(state, engine=real_engine, error_stream=errors)
