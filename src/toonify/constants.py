"""Constants shared by the TOON encoder and decoder."""

from typing import Dict

# List markers
LIST_ITEM_MARKER = "-"
LIST_ITEM_PREFIX = "- "

# Structural characters
COLON = ":"
COMMA = ","
PIPE = "|"
TAB = "\t"
SPACE = " "
OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"
BACKSLASH = "\\"

# Literals
NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

# Delimiters
DELIMITERS: Dict[str, str] = {
    "comma": COMMA,
    "tab": TAB,
    "pipe": PIPE,
}
VALID_DELIMITERS = frozenset(DELIMITERS.values())
DEFAULT_DELIMITER = COMMA

# Layout defaults
DEFAULT_INDENT = 2
DEFAULT_LENGTH_MARKER = ""

# List items with at most this many scalar-valued keys are written on one line
MAX_INLINE_OBJECT_KEYS = 5

# Nesting limit for both directions; several stack frames are used per level
DEFAULT_MAX_DEPTH = 100
