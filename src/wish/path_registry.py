"""
Path Registry - ordered search path for external commands

ARCHITECTURE:
    GroupExecutor
       ↓
    PathRegistry.resolve(name) ← THIS CLASS
       ↓
    os.access(candidate, X_OK)

RESPONSIBILITIES:
- Hold the ordered list of directories searched for unqualified commands
- Replace that list wholesale when the `path` builtin runs
- Resolve a command name to a runnable file

NOT RESPONSIBLE FOR:
- Deciding whether a name is a builtin (GroupExecutor)
- Launching anything (ExecutionEngine)

RESOLUTION ORDER:
    1. name itself, relative to the current working directory
    2. dir + "/" + name for each registry entry, first match wins

Every lookup probes the filesystem again. There is no cache, so a `path`
or `cd` takes effect on the very next command.
"""
import os
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .constants import DEFAULT_SEARCH_PATH, MAX_SEARCH_PATHS
from .exceptions import RegistryOverflowError


class PathRegistry:
    """
    Ordered directory list used to find external commands.

    Duplicates are kept; insertion order is search order.

    Example:
        >>> registry = PathRegistry()
        >>> registry.directories
        ('/bin',)
        >>> registry.replace(['/usr/bin', '/bin'])
        >>> registry.resolve('ls')
        '/usr/bin/ls'
    """

    def __init__(self, directories: Optional[Iterable[str]] = None,
                 max_entries: int = MAX_SEARCH_PATHS,
                 logger: logging.Logger = None):
        self.logger = logger or logging.getLogger('PathRegistry')
        self.max_entries = max_entries
        self._directories: List[str] = []

        if directories is None:
            directories = DEFAULT_SEARCH_PATH
        self.replace(directories)

    @property
    def directories(self) -> Tuple[str, ...]:
        """Current search path, in search order"""
        return tuple(self._directories)

    def replace(self, new_dirs: Iterable[str]) -> None:
        """
        Discard every entry and install `new_dirs`.

        An empty iterable leaves the registry empty: only commands
        executable from the cwd can run after that.

        Raises:
            RegistryOverflowError: more than max_entries directories.
                The registry is left untouched.
        """
        new_dirs = list(new_dirs)
        if len(new_dirs) > self.max_entries:
            raise RegistryOverflowError(len(new_dirs), self.max_entries)

        self._directories = new_dirs
        self.logger.debug(f"Search path set to {self._directories}")

    def resolve(self, name: str) -> Optional[str]:
        """
        Find an executable for `name`.

        Returns:
            `name` unchanged if it is executable from the cwd, otherwise the
            first `dir/name` with execute permission, otherwise None.
        """
        if os.access(name, os.X_OK):
            self.logger.debug(f"{name}: executable from cwd")
            return name

        for directory in self._directories:
            candidate = directory + "/" + name
            if os.access(candidate, os.X_OK):
                self.logger.debug(f"{name}: resolved to {candidate}")
                return candidate

        self.logger.debug(f"{name}: not found in {self._directories}")
        return None

    def __len__(self) -> int:
        return len(self._directories)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._directories))

    def __repr__(self):
        return f"PathRegistry({self._directories!r})"
