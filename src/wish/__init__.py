"""
wish - a small parallel command shell

Main components:
- Shell: Read loop and entry point
- CommandExecutor: Line execution and child supervision
- GroupExecutor: One command group (builtins, resolution, redirection)
- ExecutionEngine: Process creation and waiting
- LineNormalizer: Operator spacing before tokenizing
- PathRegistry: Search path for external commands
- ShellState: State shared across lines
"""

from .shell import Shell, main
from .command_executor import CommandExecutor, LineResult
from .group_executor import GroupExecutor
from .execution_engine import ExecutionEngine
from .line_normalizer import LineNormalizer
from .path_registry import PathRegistry
from .shell_state import ShellState
from .config import ShellConfig

__all__ = [
    'Shell',
    'main',
    'CommandExecutor',
    'LineResult',
    'GroupExecutor',
    'ExecutionEngine',
    'LineNormalizer',
    'PathRegistry',
    'ShellState',
    'ShellConfig',
]
