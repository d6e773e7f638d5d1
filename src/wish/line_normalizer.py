"""
Line Normalizer - make operators whitespace-delimited before tokenizing

ARCHITECTURE:
    CommandExecutor.execute_line(raw)
       ↓
    LineNormalizer.normalize(raw) ← THIS CLASS
       ↓
    command_parser.tokenize(normalized)

RESPONSIBILITIES:
- Truncate overlong input
- Drop horizontal tabs
- Pad the first '>' and every '&' with exactly one space on each side

NOT RESPONSIBLE FOR:
- Splitting into tokens (command_parser)
- Deciding whether the redirection is well formed (command_parser)

EXAMPLES:
    "ls>out\\n"         → "ls > out\\n"
    "a&b   &c\\n"       → "a & b & c\\n"
    "echo\\thi\\n"       → "echohi\\n"
    "\\t\\n"             → None   (nothing left, caller treats it as a no-op)

Only the FIRST '>' is rewritten. A second one that is not already surrounded
by spaces stays glued to its neighbours ("a>b>c" → "a > b>c").
"""
import logging
from typing import Optional

from .constants import (
    MAX_LINE_LENGTH, REDIRECT_OPERATOR, PARALLEL_OPERATOR,
    LINE_TERMINATOR, TOKEN_SEPARATOR, TAB
)


def pad_operator(text: str, index: int) -> str:
    """
    Surround the one-character operator at `index` with single spaces.

    Spaces already next to the operator are collapsed, so padding an
    already padded operator returns `text` unchanged.
    """
    left = text[:index].rstrip(TOKEN_SEPARATOR)
    right = text[index + 1:].lstrip(TOKEN_SEPARATOR)
    operator = text[index]
    return f"{left}{TOKEN_SEPARATOR}{operator}{TOKEN_SEPARATOR}{right}"


class LineNormalizer:
    """
    Rewrites one raw input line into tokenizer-friendly form.

    Stateless apart from the configured length limit.
    """

    def __init__(self, max_line_length: int = MAX_LINE_LENGTH,
                 logger: logging.Logger = None):
        self.max_line_length = max_line_length
        self.logger = logger or logging.getLogger('LineNormalizer')

    def normalize(self, raw_line: str) -> Optional[str]:
        """
        Normalize a raw line.

        Args:
            raw_line: Line as read, with or without its trailing newline

        Returns:
            Normalized line ending in a newline, or None if nothing is left
            once the terminator and tabs are gone.
        """
        if len(raw_line) > self.max_line_length:
            self.logger.debug(
                f"Line truncated from {len(raw_line)} to {self.max_line_length} chars"
            )
            raw_line = raw_line[:self.max_line_length]

        body = raw_line.split(LINE_TERMINATOR, 1)[0]
        body = body.replace(TAB, "")
        if not body:
            return None

        body = self._pad_redirect(body)
        body = self._pad_parallel(body)

        return body + LINE_TERMINATOR

    def _pad_redirect(self, body: str) -> str:
        """Pad the first redirection operator only"""
        index = body.find(REDIRECT_OPERATOR)
        if index == -1:
            return body
        return pad_operator(body, index)

    def _pad_parallel(self, body: str) -> str:
        """
        Pad every concurrency operator, left to right.

        Each rewrite shifts everything after the operator, so the scan
        resumes just past the operator in the rewritten string. An operator
        at the very end leaves an empty right side, which is fine.
        """
        cursor = 0
        while True:
            index = body.find(PARALLEL_OPERATOR, cursor)
            if index == -1:
                return body

            left = body[:index].rstrip(TOKEN_SEPARATOR)
            body = pad_operator(body, index)
            # body is now "<left> & <right>"
            cursor = len(left) + 2
