"""
Shell State - process-wide state owned by the control loop

This module holds everything that survives from one command line to the
next: the search path, the interactive/batch flag (which decides whether
the prompt is shown) and the descriptors the shell opened for redirection.

Architecture:
    - ShellState: one instance per Shell, created at startup
    - Mutated only from the control thread (builtins, group setup)
    - close() releases what it owns; called on `exit` and end-of-input

The working directory is not stored here: the OS keeps it, `cd` changes it
with os.chdir and `cwd` just asks.

Example:
    >>> state = ShellState()
    >>> state.search_path
    ('/bin',)
    >>> state.path_registry.replace(['/usr/bin'])
    >>> state.search_path
    ('/usr/bin',)
    >>> state.close()
"""
import os
import logging
from typing import Iterable, List, Optional

from .constants import MAX_SEARCH_PATHS
from .path_registry import PathRegistry


class ShellState:
    """
    Mutable state shared by every command line of one shell session.
    """

    def __init__(self, search_path: Optional[Iterable[str]] = None,
                 interactive: bool = True,
                 max_search_paths: int = MAX_SEARCH_PATHS,
                 logger: logging.Logger = None):
        """
        Args:
            search_path: Initial directories (None = default search path)
            interactive: True for prompt mode, False for batch mode
            max_search_paths: Capacity of the search path
        """
        self.logger = logger or logging.getLogger('ShellState')
        self.path_registry = PathRegistry(search_path, max_entries=max_search_paths)
        self.interactive = interactive
        self._redirect_fds: List[int] = []
        self.closed = False

    @property
    def search_path(self):
        return self.path_registry.directories

    @property
    def cwd(self) -> str:
        return os.getcwd()

    def track_descriptor(self, fd: int) -> None:
        """Remember a redirect descriptor so close() can release it"""
        self._redirect_fds.append(fd)

    @property
    def open_descriptors(self) -> List[int]:
        return list(self._redirect_fds)

    def close(self) -> None:
        """Release owned descriptors. Safe to call more than once."""
        if self.closed:
            return

        for fd in self._redirect_fds:
            try:
                os.close(fd)
            except OSError as e:
                self.logger.debug(f"Closing descriptor {fd} failed: {e}")
        self.logger.debug(f"Released {len(self._redirect_fds)} descriptor(s)")
        self._redirect_fds.clear()
        self.closed = True
