"""
Shell configuration

ARCHITECTURE:
- Defaults live in constants.py
- ShellConfig bundles them into one object handed to Shell and its parts
- ShellConfig.from_env() lets WISH_* environment variables override them

ENVIRONMENT:
    WISH_PROMPT       prompt string
    WISH_PATH         initial search path, colon separated ("" = empty)
    WISH_MAX_LINE     max characters read per line
    WISH_MAX_PATHS    max directories accepted by `path`
    WISH_LOG_LEVEL    logging level name (DEBUG, INFO, ...)
"""
import os
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .constants import (
    PROMPT, DEFAULT_SEARCH_PATH, MAX_LINE_LENGTH, MAX_SEARCH_PATHS
)

logger = logging.getLogger('ShellConfig')

LOG_FORMAT = '%(levelname)-8s - %(name)-20s - %(message)s'


@dataclass
class ShellConfig:
    """Runtime settings for one shell instance."""
    prompt: str = PROMPT
    search_path: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_SEARCH_PATH))
    max_line_length: int = MAX_LINE_LENGTH
    max_search_paths: int = MAX_SEARCH_PATHS
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ShellConfig':
        """Build a config from defaults plus WISH_* overrides."""
        environ = os.environ if environ is None else environ
        config = cls()

        if 'WISH_PROMPT' in environ:
            config.prompt = environ['WISH_PROMPT']

        if 'WISH_PATH' in environ:
            raw = environ['WISH_PATH']
            config.search_path = tuple(d for d in raw.split(':') if d)

        config.max_line_length = _int_setting(
            environ, 'WISH_MAX_LINE', config.max_line_length)
        config.max_search_paths = _int_setting(
            environ, 'WISH_MAX_PATHS', config.max_search_paths)

        level = environ.get('WISH_LOG_LEVEL')
        if level:
            if isinstance(logging.getLevelName(level.upper()), int):
                config.log_level = level.upper()
            else:
                logger.warning(f"Ignoring unknown WISH_LOG_LEVEL={level!r}")

        return config

    def configure_logging(self) -> None:
        """Send log records to stderr, leaving stdout to commands."""
        logging.basicConfig(level=self.log_level, format=LOG_FORMAT)


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}")
        return default
    return value
