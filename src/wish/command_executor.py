"""
Command Executor - one input line, start to finish

ARCHITECTURE:
    execute_line(raw)
        ↓
    LineNormalizer.normalize(raw)      → None? CONTINUE
        ↓
    parse_command_line(normalized)     → no groups? CONTINUE
        ↓
    GroupExecutor.execute(group) × N   (launch order, no waiting)
        ├─ ShellError  → report, next group
        └─ bare `exit` → TERMINATE right away
        ↓
    wait for every handle, in launch order
        ↓
    CONTINUE

RESPONSIBILITIES:
- Drive normalizer → parser → group executor
- Report per-group errors with the generic diagnostic
- Reap every child launched by the line before returning

NOT RESPONSIBLE FOR:
- Reading input or printing the prompt (Shell)
- Process creation (ExecutionEngine)

EXIT ON A BUSY LINE:
`sleep 5 & exit` returns TERMINATE as soon as `exit` is reached. The
`sleep` started by the earlier group is NOT waited for; the shell tears
down while it is still running.
"""
import logging
import subprocess
from enum import Enum
from typing import List, Optional, TextIO

from .command_parser import parse_command_line
from .constants import MAX_LINE_LENGTH
from .exceptions import FatalError, ShellError, report_error
from .execution_engine import ExecutionEngine
from .group_executor import GroupExecutor
from .line_normalizer import LineNormalizer
from .shell_state import ShellState


class LineResult(Enum):
    """What the read loop should do after a line"""
    CONTINUE = "continue"
    TERMINATE = "terminate"


class CommandExecutor:
    """
    Line executor and child supervisor.

    Groups on a line are launched left to right without waiting; the
    supervisor then waits on each child in that same order, so a slow early
    child can hold up the prompt while later ones have already finished.
    """

    def __init__(self, state: ShellState,
                 engine: Optional[ExecutionEngine] = None,
                 max_line_length: int = MAX_LINE_LENGTH,
                 error_stream: Optional[TextIO] = None,
                 logger: logging.Logger = None):
        """
        Args:
            state: Shell state shared with builtins
            engine: Process layer (default: a fresh ExecutionEngine)
            max_line_length: Raw characters kept per line
            error_stream: Where the diagnostic goes (default: sys.stderr)
        """
        self.logger = logger or logging.getLogger('CommandExecutor')
        self.state = state
        self.engine = engine or ExecutionEngine()
        self.error_stream = error_stream
        self.normalizer = LineNormalizer(max_line_length)
        self.group_executor = GroupExecutor(state, engine=self.engine)

    def execute_line(self, raw_line: str) -> LineResult:
        """
        Execute one raw input line.

        Returns:
            LineResult.TERMINATE after a well-formed `exit`, else CONTINUE

        Raises:
            FatalError: a launched child could not be waited on
        """
        normalized = self.normalizer.normalize(raw_line)
        if normalized is None:
            return LineResult.CONTINUE

        groups = parse_command_line(normalized)
        if not groups:
            return LineResult.CONTINUE

        self.logger.info(f"Executing: {normalized.strip()[:100]}")

        handles: List[subprocess.Popen] = []
        for group in groups:
            try:
                terminate = self.group_executor.execute(group, handles)
            except ShellError as e:
                self.logger.debug(f"{group!r}: {e}")
                report_error(self.error_stream)
                continue

            if terminate:
                self.logger.info(
                    f"exit requested, leaving {len(handles)} child(ren) unreaped"
                )
                return LineResult.TERMINATE

        self._wait_all(handles)
        return LineResult.CONTINUE

    def _wait_all(self, handles: List[subprocess.Popen]) -> None:
        """Wait on each handle exactly once, in launch order"""
        for process in handles:
            try:
                self.engine.wait(process)
            except OSError as e:
                report_error(self.error_stream)
                raise FatalError(f"Lost track of child {process.pid}", e) from e
