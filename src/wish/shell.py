"""
Shell - read loop and entry point (thin layer)

ARCHITECTURE:
This is the TOP-LEVEL ENTRY POINT. It is a THIN ORCHESTRATOR: it reads
lines and hands each one to CommandExecutor.

Position in hierarchy:
    main(argv)
       ↓
    Shell.run() ← read loop
       ↓
    ├── InputSource      ← interactive prompt or batch file
    ├── ShellState       ← search path, open descriptors
    └── CommandExecutor  ← one line at a time

MODES:
    wish              interactive: prompt "wish> ", read stdin
    wish script.txt   batch: run every line of script.txt, no prompt
    wish a b          error, exit status 1

EXIT STATUS:
    0  end of input, or a well-formed `exit`
    1  bad invocation, unreadable batch file, fatal internal failure

Shell state and the input source are released on every one of those paths.

ENCODING:
Input is decoded with errors="surrogateescape". A byte that is not valid in
the locale encoding survives as a lone surrogate and is turned back into the
same byte when the argument vector is handed to the OS.
"""
import io
import sys
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from .command_executor import CommandExecutor, LineResult
from .config import ShellConfig
from .exceptions import FatalError, ShellOSError, report_error
from .execution_engine import ExecutionEngine
from .shell_state import ShellState


# ============================================================================
# INPUT SOURCES
# ============================================================================

class InputSource(ABC):
    """
    Producer of raw command lines.

    Concrete sources: InteractiveSource, BatchFileSource.
    """

    interactive = False

    def __init__(self, name: str, error_stream: Optional[TextIO] = None):
        self.name = name
        self.error_stream = error_stream
        self.logger = logging.getLogger(f"InputSource.{name}")

    def show_prompt(self) -> None:
        """Announce that a line is expected. No-op unless interactive."""
        pass

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """
        Return the next raw line, or None at end of input.

        Raises:
            FatalError: the underlying stream could not be read
        """
        pass

    def close(self) -> None:
        """Release the underlying stream, if owned"""
        pass

    def _read_from(self, stream: TextIO) -> Optional[str]:
        try:
            line = stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            report_error(self.error_stream)
            raise FatalError(f"Cannot read from {self.name}", e) from e
        return line or None


class InteractiveSource(InputSource):
    """Reads `stream`, writes the prompt to `output` on request"""

    interactive = True

    def __init__(self, prompt: str, stream: TextIO = None, output: TextIO = None,
                 error_stream: Optional[TextIO] = None):
        super().__init__('interactive', error_stream)
        self.prompt = prompt
        self.stream = stream or sys.stdin
        if isinstance(self.stream, io.TextIOWrapper):
            self.stream.reconfigure(errors='surrogateescape')
        self.output = output or sys.stdout

    def show_prompt(self) -> None:
        self.output.write(self.prompt)
        self.output.flush()

    def read_line(self) -> Optional[str]:
        return self._read_from(self.stream)


class BatchFileSource(InputSource):
    """Reads lines from a script file, no prompt"""

    def __init__(self, path: str, error_stream: Optional[TextIO] = None):
        super().__init__('batch', error_stream)
        self.path = path
        try:
            self._file = open(path, 'r', errors='surrogateescape')
        except OSError as e:
            raise ShellOSError('open', e) from e
        self.logger.info(f"Running batch file {path}")

    def read_line(self) -> Optional[str]:
        return self._read_from(self._file)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


# ============================================================================
# SHELL
# ============================================================================

class Shell:
    """
    Read-execute loop for one session.

    Owns the ShellState and the CommandExecutor for its lifetime. The mode
    flag on the state decides whether the prompt is shown before each read.
    """

    def __init__(self, source: InputSource,
                 config: Optional[ShellConfig] = None,
                 engine: Optional[ExecutionEngine] = None,
                 error_stream: Optional[TextIO] = None):
        self.config = config or ShellConfig()
        self.source = source
        self.logger = logging.getLogger('Shell')

        # Read failures and command failures share one diagnostic channel.
        if error_stream is not None:
            source.error_stream = error_stream

        self.state = ShellState(
            search_path=self.config.search_path,
            interactive=source.interactive,
            max_search_paths=self.config.max_search_paths,
        )
        self.executor = CommandExecutor(
            self.state,
            engine=engine,
            max_line_length=self.config.max_line_length,
            error_stream=error_stream,
        )

    def run(self) -> int:
        """
        Loop until end of input or `exit`.

        Returns:
            Process exit status
        """
        self.logger.info(
            f"Shell started ({'interactive' if self.state.interactive else 'batch'})"
        )
        try:
            while True:
                if self.state.interactive:
                    self.source.show_prompt()
                line = self.source.read_line()
                if line is None:
                    break
                if self.executor.execute_line(line) is LineResult.TERMINATE:
                    break
            return 0
        except FatalError as e:
            self.logger.error(f"Fatal: {e}")
            return 1
        finally:
            self.state.close()
            self.source.close()
            self.logger.debug(f"Engine stats: {self.executor.engine.stats}")


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point"""
    if argv is None:
        argv = sys.argv[1:]

    config = ShellConfig.from_env()
    config.configure_logging()

    if len(argv) > 1:
        report_error()
        return 1

    if argv:
        try:
            source = BatchFileSource(argv[0])
        except ShellOSError as e:
            logging.getLogger('Shell').debug(str(e))
            report_error()
            return 1
    else:
        source = InteractiveSource(config.prompt)

    return Shell(source, config=config).run()


if __name__ == '__main__':
    sys.exit(main())
