"""
Shell exception hierarchy

ARCHITECTURE:
    ShellError (base)
    ├── UsageError               - the user asked for something malformed
    │   ├── RedirectionSyntaxError
    │   ├── RedirectTargetError
    │   ├── BuiltinArityError
    │   ├── CommandNotFoundError
    │   └── RegistryOverflowError
    ├── ShellOSError             - an underlying system call failed
    └── FatalError               - the shell itself cannot continue

PROPAGATION:
- UsageError / ShellOSError: reported with the generic diagnostic, only the
  current command group is aborted. The shell reads the next line.
- FatalError: propagates out of the read loop, the shell tears down and
  exits with status 1.

The user never sees the message text of these exceptions, only
ERROR_MESSAGE. The text goes to the debug log.
"""
import sys
from typing import Optional, TextIO

from .constants import ERROR_MESSAGE


class ShellError(Exception):
    """Base class for all shell errors."""

    def __init__(self, message: str = "", details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class UsageError(ShellError):
    """Malformed command line or builtin invocation."""
    pass


class RedirectionSyntaxError(UsageError):
    """More than one '>' in a group, or '>' not followed by exactly one file."""

    def __init__(self, group, reason: str):
        super().__init__(
            f"Bad redirection: {reason}",
            details={'group': ' '.join(group)}
        )
        self.group = tuple(group)
        self.reason = reason


class RedirectTargetError(UsageError):
    """Redirect target is a directory or is not writable."""

    def __init__(self, target: str, reason: str):
        super().__init__(
            f"Cannot redirect to {target!r}: {reason}",
            details={'target': target}
        )
        self.target = target
        self.reason = reason


class BuiltinArityError(UsageError):
    """Builtin called with the wrong number of arguments."""

    def __init__(self, builtin: str, expected: str, got: int):
        super().__init__(
            f"{builtin}: expected {expected} argument(s), got {got}",
            details={'builtin': builtin}
        )
        self.builtin = builtin
        self.expected = expected
        self.got = got


class CommandNotFoundError(UsageError):
    """Command is neither executable from cwd nor found on the search path."""

    def __init__(self, command: str, search_path=()):
        super().__init__(
            f"{command}: command not found",
            details={'path': ':'.join(search_path)}
        )
        self.command = command
        self.search_path = tuple(search_path)


class RegistryOverflowError(UsageError):
    """Too many directories handed to the `path` builtin."""

    def __init__(self, requested: int, capacity: int):
        super().__init__(
            f"Search path holds at most {capacity} directories, got {requested}",
            details={'requested': requested, 'capacity': capacity}
        )
        self.requested = requested
        self.capacity = capacity


class ShellOSError(ShellError):
    """A system call (open, chdir, process creation, exec) failed."""

    def __init__(self, operation: str, error: Optional[OSError] = None):
        if error is None:
            reason = "unknown error"
        else:
            reason = error.strerror or str(error)
        super().__init__(
            f"{operation} failed: {reason}",
            details={'errno': getattr(error, 'errno', None)}
        )
        self.operation = operation
        self.error = error


class FatalError(ShellError):
    """The shell cannot continue (lost track of a child, input unreadable)."""

    def __init__(self, message: str, error: Optional[BaseException] = None):
        super().__init__(message)
        self.error = error


def report_error(stream: Optional[TextIO] = None) -> None:
    """Write the generic diagnostic to stderr (or `stream`)."""
    stream = stream or sys.stderr
    stream.write(ERROR_MESSAGE)
    stream.flush()
