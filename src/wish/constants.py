"""
Constants and configuration for the wish shell
"""

# ============================================================================
# USER-VISIBLE TEXT
# ============================================================================
# Interactive prompt, written before every read in interactive mode.
PROMPT = "wish> "

# The one and only diagnostic. Every failure (bad syntax, missing command,
# failed chdir, ...) prints exactly this to stderr.
ERROR_MESSAGE = "An error has occurred\n"


# ============================================================================
# OPERATORS
# ============================================================================
REDIRECT_OPERATOR = ">"     # stdout to file, at most one per group
PARALLEL_OPERATOR = "&"     # separates groups launched together

LINE_TERMINATOR = "\n"
TOKEN_SEPARATOR = " "
TAB = "\t"


# ============================================================================
# BUILTINS
# ============================================================================
# Executed by the shell itself, checked before search path resolution.
BUILTIN_EXIT = "exit"
BUILTIN_CD = "cd"
BUILTIN_PATH = "path"

BUILTIN_COMMANDS = {
    BUILTIN_EXIT,   # no arguments, terminates the shell
    BUILTIN_CD,     # exactly one argument
    BUILTIN_PATH,   # zero or more arguments, replaces the search path
}


# ============================================================================
# LIMITS AND DEFAULTS
# ============================================================================
DEFAULT_SEARCH_PATH = ("/bin",)

# Raw input beyond this many characters is silently dropped.
MAX_LINE_LENGTH = 512

# `path` with more directories than this fails with RegistryOverflowError.
MAX_SEARCH_PATHS = 128

# Permission bits for redirect targets the shell has to create.
REDIRECT_FILE_MODE = 0o644
