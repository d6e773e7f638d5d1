"""
Execution Engine - single point for all process and descriptor operations

ARCHITECTURE:
This is the SINGLE SUBPROCESS EXECUTION POINT for the shell.
All process creation, waiting and redirect opening goes through this class
(no direct subprocess.Popen() or os.open() elsewhere).

Position in hierarchy:
    CommandExecutor (supervisor: wait)
       ↓
    GroupExecutor (open redirect, launch)
       ↓
    ExecutionEngine ← THIS CLASS
       ↓
    subprocess.Popen() / os.open()

RESPONSIBILITIES:
1. Open redirect targets with the right flags
2. Launch a child with argv[0] = original command name
3. Point the child's stdout at the redirect descriptor
4. Wait for a child and report its exit status
5. Count launches and reaps

NOT RESPONSIBLE FOR:
- Deciding what to launch (GroupExecutor)
- Search path resolution (PathRegistry)
- Wait ordering (CommandExecutor)

REDIRECT FLAGS:
    target exists   → O_WRONLY | O_TRUNC
    target missing  → O_WRONLY | O_CREAT            (no O_TRUNC)

The two cases are kept apart on purpose: they behave differently when the
same target is written again by a later line.

CHILD FAILURES:
subprocess.Popen sets up stdout and replaces the program image in the
child. If either step fails the child exits and Popen raises in the parent;
that is turned into ShellOSError so only the current group is lost.
"""
import os
import sys
import logging
import subprocess
from typing import Dict, List, Optional

from .constants import REDIRECT_FILE_MODE
from .exceptions import ShellOSError


class ExecutionEngine:
    """
    Single execution point for child processes.

    USAGE PATTERN:
        engine = ExecutionEngine()
        fd = engine.open_redirect('out.txt', exists=False)
        proc = engine.launch('/bin/echo', ['echo', 'hi'], stdout_fd=fd)
        engine.wait(proc)
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger('ExecutionEngine')

        # Execution statistics
        self.stats: Dict[str, int] = {
            'launched': 0,
            'reaped': 0,
            'failed_launches': 0,
        }

    # ========================================================================
    # REDIRECTION
    # ========================================================================

    def open_redirect(self, target: str, exists: bool) -> int:
        """
        Open a redirect target for writing.

        Args:
            target: File path as typed by the user
            exists: Whether the file was found during validation

        Returns:
            Raw descriptor, owned by the caller

        Raises:
            ShellOSError: open() failed
        """
        if exists:
            flags = os.O_WRONLY | os.O_TRUNC
        else:
            flags = os.O_WRONLY | os.O_CREAT

        try:
            fd = os.open(target, flags, REDIRECT_FILE_MODE)
        except OSError as e:
            self.logger.debug(f"open({target!r}) failed: {e}")
            raise ShellOSError('open', e) from e

        self.logger.debug(f"Opened redirect target {target!r} as fd {fd}")
        return fd

    # ========================================================================
    # PROCESSES
    # ========================================================================

    def launch(self, executable: str, argv: List[str],
               stdout_fd: Optional[int] = None) -> subprocess.Popen:
        """
        Start a child process without waiting for it.

        Args:
            executable: Resolved path of the program. A bare name means a
                file in the working directory.
            argv: Full argument vector, argv[0] is the original command text
            stdout_fd: Descriptor to use as the child's stdout (None = inherit)

        Returns:
            Popen handle

        Raises:
            ShellOSError: process creation, stdout setup or exec failed
        """
        # Popen looks a slash-free executable up on $PATH. The registry only
        # returns such a name when the file sits in the working directory.
        if os.sep not in executable:
            executable = os.path.join(os.curdir, executable)

        # Anything the shell buffered must hit the terminal before the child
        # starts writing to the same descriptor.
        sys.stdout.flush()

        try:
            process = subprocess.Popen(argv, executable=executable, stdout=stdout_fd)
        except (OSError, subprocess.SubprocessError) as e:
            self.stats['failed_launches'] += 1
            self.logger.debug(f"Launch of {executable!r} failed: {e}")
            if isinstance(e, OSError):
                raise ShellOSError('exec', e) from e
            raise ShellOSError('fork') from e

        self.stats['launched'] += 1
        self.logger.info(f"Launched pid {process.pid}: {' '.join(argv)[:100]}")
        return process

    def wait(self, process: subprocess.Popen) -> int:
        """
        Block until `process` finishes.

        Returns:
            Exit status (negative = killed by signal)

        Raises:
            OSError: the child could not be waited on. The caller decides
                how fatal that is. Popen.wait() itself treats ECHILD as a
                status of 0, so for a Popen handle this only comes from a
                failure other than a child that was already reaped.
        """
        returncode = process.wait()
        self.stats['reaped'] += 1

        if returncode != 0:
            self.logger.info(f"pid {process.pid} exited with status {returncode}")
        else:
            self.logger.debug(f"pid {process.pid} exited with status 0")
        return returncode
