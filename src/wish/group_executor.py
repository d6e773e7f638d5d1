"""
Group Executor - run ONE command group

ARCHITECTURE:
    CommandExecutor (one call per group, launch order)
       ↓
    GroupExecutor.execute(group, handles) ← THIS CLASS
       ↓
    ├── parse_group()      (redirection syntax, args/target split)
    ├── BuiltinCommands    (exit, cd, path)
    ├── PathRegistry       (external resolution)
    └── ExecutionEngine    (open redirect, launch)

RESPONSIBILITIES:
1. Validate redirection syntax
2. Validate and open the redirect target
3. Dispatch builtins synchronously
4. Resolve external commands and launch them
5. Append the new handle to the caller's list, never wait

NOT RESPONSIBLE FOR:
- Splitting the line into groups (command_parser)
- Waiting for children (CommandExecutor)
- Reporting errors to the user (CommandExecutor)

DECISION TREE:
    execute(group) →
        parse_group()            → RedirectionSyntaxError
           ↓
        redirect requested?
           YES → directory / not writable → RedirectTargetError
                 open (truncate or create) → ShellOSError
           ↓
        builtin? → run it, return its terminate flag
           ↓
        resolve() → CommandNotFoundError
           ↓
        launch() → ShellOSError
           ↓
        handles.append(process)

The redirect target is opened before builtin dispatch, so even
`exit > file` leaves `file` behind.
"""
import os
import stat
import logging
import subprocess
from typing import List, Optional

from .command_parser import CommandGroup, parse_group
from .builtin_commands import BuiltinCommands
from .execution_engine import ExecutionEngine
from .exceptions import CommandNotFoundError, RedirectTargetError, ShellOSError
from .shell_state import ShellState


class GroupExecutor:
    """
    Executes a single command group.

    Raises the UsageError / ShellOSError family on failure; the caller
    reports it and moves on to the next group.
    """

    def __init__(self, state: ShellState,
                 engine: Optional[ExecutionEngine] = None,
                 logger: logging.Logger = None):
        self.logger = logger or logging.getLogger('GroupExecutor')
        self.state = state
        self.engine = engine or ExecutionEngine()
        self.builtins = BuiltinCommands(state)

    def execute(self, group: CommandGroup, handles: List[subprocess.Popen]) -> bool:
        """
        Execute one group.

        Args:
            group: Tokens of the group, command first
            handles: Shared launch list, extended in place

        Returns:
            True if the shell must terminate (well-formed bare `exit`)
        """
        parsed = parse_group(group)
        self.logger.debug(f"Executing {parsed!r}")

        stdout_fd = None
        if parsed.has_redirect:
            stdout_fd = self._open_redirect(parsed.redirect_target)

        if self.builtins.is_builtin(parsed.command):
            return self.builtins.execute(parsed.command, parsed.args)

        executable = self.state.path_registry.resolve(parsed.command)
        if executable is None:
            raise CommandNotFoundError(parsed.command, self.state.search_path)

        process = self.engine.launch(executable, parsed.argv, stdout_fd=stdout_fd)
        handles.append(process)
        return False

    def _open_redirect(self, target: str) -> int:
        """
        Check the target and open it.

        An existing target must be a writable non-directory and is truncated.
        A missing one is created.
        """
        exists = os.access(target, os.F_OK)

        if exists:
            try:
                mode = os.stat(target).st_mode
            except OSError as e:
                raise ShellOSError('stat', e) from e
            if stat.S_ISDIR(mode):
                raise RedirectTargetError(target, "is a directory")
            if not os.access(target, os.W_OK):
                raise RedirectTargetError(target, "not writable")

        fd = self.engine.open_redirect(target, exists=exists)
        self.state.track_descriptor(fd)
        return fd

