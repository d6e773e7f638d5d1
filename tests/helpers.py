"""
Test helpers shared by the test modules (fakes, script builders)
"""
import os
import shutil

import pytest

from wish.execution_engine import ExecutionEngine

SEARCH_PATH = ('/bin', '/usr/bin')


def require(*programs):
    """Skip the test unless every program is on SEARCH_PATH"""
    missing = [p for p in programs if which(p) is None]
    return pytest.mark.skipif(bool(missing), reason=f"missing {missing}")


def make_script(path, body="exit 0\n", mode=0o755):
    """Write a /bin/sh script and set its permission bits"""
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(mode)
    return path


class FakeProcess:
    """Stand-in for subprocess.Popen that is already finished"""

    _next_pid = 40000

    def __init__(self, argv, executable, stdout_fd):
        FakeProcess._next_pid += 1
        self.pid = FakeProcess._next_pid
        self.args = argv
        self.executable = executable
        self.stdout_fd = stdout_fd
        self.wait_calls = 0

    def wait(self):
        self.wait_calls += 1
        return 0

    def poll(self):
        return 0


class RecordingEngine(ExecutionEngine):
    """
    ExecutionEngine that records launches and waits.

    With real=False nothing is spawned: launch() returns a FakeProcess.
    Redirect targets are always opened for real.
    """

    def __init__(self, real=False, fail_wait=False):
        super().__init__()
        self.real = real
        self.fail_wait = fail_wait
        self.launched = []
        self.waited = []

    def launch(self, executable, argv, stdout_fd=None):
        if self.real:
            process = super().launch(executable, argv, stdout_fd=stdout_fd)
        else:
            process = FakeProcess(argv, executable, stdout_fd)
            self.stats['launched'] += 1
        self.launched.append(process)
        return process

    def wait(self, process):
        if self.fail_wait:
            raise ChildProcessError(10, "No child processes")
        self.waited.append(process)
        return super().wait(process)


def which(program):
    """Full path of `program` on SEARCH_PATH, or None"""
    return shutil.which(program, path=os.pathsep.join(SEARCH_PATH))
