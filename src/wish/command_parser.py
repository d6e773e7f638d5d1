"""
Command Parser - tokens, parallel groups and redirection

OBJECTIVE: Turn one normalized line into the groups to launch.

============================================================================
USAGE
============================================================================

    >>> from wish.command_parser import parse_command_line, parse_group
    >>> groups = parse_command_line("ls -la & echo hi > out.txt\\n")
    >>> groups
    [Group(ls -la), Group(echo hi > out.txt)]
    >>> parse_group(groups[1])
    Parsed(echo hi [>out.txt])

============================================================================
ARCHITECTURE
============================================================================

    Normalized line →
        tokenize() (split on spaces) →
            group_tokens() (split on '&') →
                CommandGroup list (launch order) →
                    parse_group() per group (redirection + args) →
                        ParsedGroup

============================================================================
GRAMMAR
============================================================================

    line  := group ( '&' group )*
    group := token+          (at most one '>' token, followed by one file)

Leading, trailing and repeated '&' produce no empty groups. A line made only
of '&' produces zero groups.

============================================================================
LIMITATIONS
============================================================================

- No quotes, no escapes: a token is whatever sits between spaces
- The normalizer has to run first, otherwise "a&b" is one token
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .constants import (
    REDIRECT_OPERATOR, PARALLEL_OPERATOR, LINE_TERMINATOR, TOKEN_SEPARATOR
)
from .exceptions import RedirectionSyntaxError

logger = logging.getLogger('CommandParser')


# ============================================================================
# DATA MODEL
# ============================================================================

@dataclass(frozen=True)
class CommandGroup:
    """
    One command with its raw trailing tokens.

    tokens[0] is the command name; the rest are arguments and possibly
    redirection syntax, still unvalidated.
    """
    tokens: Tuple[str, ...]

    def __post_init__(self):
        if not self.tokens:
            raise ValueError("CommandGroup needs at least one token")

    @property
    def command(self) -> str:
        return self.tokens[0]

    @property
    def rest(self) -> Tuple[str, ...]:
        return self.tokens[1:]

    def __len__(self):
        return len(self.tokens)

    def __repr__(self):
        return f"Group({' '.join(self.tokens)})"


@dataclass
class ParsedGroup:
    """
    A validated group ready for dispatch.

    Example: echo a b > out.txt
        command         = 'echo'
        args            = ['a', 'b']
        redirect_target = 'out.txt'
    """
    command: str
    args: List[str] = field(default_factory=list)
    redirect_target: Optional[str] = None

    @property
    def argv(self) -> List[str]:
        """Argument vector for the child: original name first"""
        return [self.command] + self.args

    @property
    def has_redirect(self) -> bool:
        return self.redirect_target is not None

    def __repr__(self):
        args_str = ' '.join(self.args)
        redir_str = f" [{REDIRECT_OPERATOR}{self.redirect_target}]" if self.has_redirect else ''
        return f"Parsed({self.command} {args_str}{redir_str})"


# ============================================================================
# TOKENIZER
# ============================================================================

def tokenize(line: str) -> List[str]:
    """
    Split a normalized line on runs of spaces.

    The newline is stripped from the token carrying it. If nothing is left
    of that token, tokenizing stops there (rest of line is blank).

    Returns:
        Non-empty tokens in order. An empty list means an empty command line.
    """
    tokens = []
    for token in line.split(TOKEN_SEPARATOR):
        if not token:
            continue
        if LINE_TERMINATOR in token:
            token = token.replace(LINE_TERMINATOR, '')
            if not token:
                break
        tokens.append(token)
    return tokens


# ============================================================================
# GROUPER
# ============================================================================

def group_tokens(tokens: Sequence[str]) -> List[CommandGroup]:
    """
    Partition tokens into groups separated by the concurrency operator.

    Two cursors: `begin` skips any run of '&', `end` walks to the next '&'
    (or the end). tokens[begin:end] is one group.
    """
    groups = []
    num_tokens = len(tokens)
    begin = 0

    while begin < num_tokens:
        while begin < num_tokens and tokens[begin] == PARALLEL_OPERATOR:
            begin += 1
        if begin >= num_tokens:
            break

        end = begin
        while end < num_tokens and tokens[end] != PARALLEL_OPERATOR:
            end += 1

        groups.append(CommandGroup(tuple(tokens[begin:end])))
        begin = end

    return groups


def parse_command_line(line: str) -> List[CommandGroup]:
    """Tokenize and group one normalized line"""
    groups = group_tokens(tokenize(line))
    logger.debug(f"Groups: {groups}")
    return groups


# ============================================================================
# GROUP PARSER
# ============================================================================

def parse_group(group: CommandGroup) -> ParsedGroup:
    """
    Validate redirection syntax and split arguments from the target.

    Rules:
        - at most one '>'
        - if present, exactly one token after it
        - tokens between the command and '>' are the arguments

    Raises:
        RedirectionSyntaxError: any rule above is broken
    """
    operator_index = -1
    num_operators = 0
    num_targets = 0

    for index, token in enumerate(group.tokens):
        if num_operators > 0:
            num_targets += 1
        if token == REDIRECT_OPERATOR:
            operator_index = index
            num_operators += 1

    if num_operators > 1:
        raise RedirectionSyntaxError(group.tokens, "more than one redirection")
    if num_operators == 1 and num_targets == 0:
        raise RedirectionSyntaxError(group.tokens, "missing redirection target")
    if num_targets > 1:
        raise RedirectionSyntaxError(group.tokens, "more than one redirection target")

    if operator_index == -1:
        return ParsedGroup(command=group.command, args=list(group.rest))

    return ParsedGroup(
        command=group.command,
        args=list(group.tokens[1:operator_index]),
        redirect_target=group.tokens[operator_index + 1],
    )
