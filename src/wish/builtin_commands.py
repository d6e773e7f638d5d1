"""
Shell built-in commands

Builtins run synchronously in the control thread. They never produce a
process handle and never count toward the wait set of a line.

    exit          terminate the shell (no arguments allowed)
    cd DIR        change the working directory (exactly one argument)
    path [DIR..]  replace the search path (zero or more arguments)
"""
import os
import logging
from typing import Callable, Dict, List

from .constants import BUILTIN_EXIT, BUILTIN_CD, BUILTIN_PATH
from .exceptions import BuiltinArityError, ShellOSError
from .shell_state import ShellState


class BuiltinCommands:
    """
    Dispatch table for builtins.

    Every handler takes the argument list (command name excluded) and
    returns True when the shell has to terminate.
    """

    def __init__(self, state: ShellState, logger: logging.Logger = None):
        self.state = state
        self.logger = logger or logging.getLogger('BuiltinCommands')
        self._commands: Dict[str, Callable[[List[str]], bool]] = {
            BUILTIN_EXIT: self.cmd_exit,
            BUILTIN_CD: self.cmd_cd,
            BUILTIN_PATH: self.cmd_path,
        }

    def is_builtin(self, name: str) -> bool:
        """Exact, case-sensitive match"""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> bool:
        """
        Run builtin `name`.

        Returns:
            True if the shell should terminate

        Raises:
            UsageError / ShellOSError from the handler
            KeyError: `name` is not a builtin
        """
        handler = self._commands[name]
        self.logger.debug(f"Builtin {name} {args}")
        return handler(args)

    def cmd_exit(self, args: List[str]) -> bool:
        # A malformed exit is an error, and the shell keeps running.
        if args:
            raise BuiltinArityError(BUILTIN_EXIT, "0", len(args))
        return True

    def cmd_cd(self, args: List[str]) -> bool:
        if len(args) != 1:
            raise BuiltinArityError(BUILTIN_CD, "1", len(args))
        try:
            os.chdir(args[0])
        except OSError as e:
            raise ShellOSError('chdir', e) from e
        self.logger.debug(f"cwd is now {os.getcwd()}")
        return False

    def cmd_path(self, args: List[str]) -> bool:
        self.state.path_registry.replace(args)
        return False
