"""Quoting and escaping of TOON string scalars.

A string is written bare unless reading it back would be ambiguous: it could
be mistaken for a literal or a number, it would be split by the active
delimiter, or it contains structural characters. Quoted strings use double
quotes and backslash escapes.
"""

import re

from .constants import (
    BACKSLASH,
    DEFAULT_DELIMITER,
    DOUBLE_QUOTE,
    FALSE_LITERAL,
    LIST_ITEM_MARKER,
    NULL_LITERAL,
    SINGLE_QUOTE,
    TRUE_LITERAL,
)

_NUMERIC_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

_STRUCTURAL_CHARS = frozenset(":[]{}#\n\r\t" + BACKSLASH)

_KEYWORDS = frozenset({NULL_LITERAL, TRUE_LITERAL, FALSE_LITERAL})

# Checked in this order so that backslashes introduced by later replacements
# are not escaped twice.
_ESCAPES = (
    (BACKSLASH, BACKSLASH + BACKSLASH),
    (DOUBLE_QUOTE, BACKSLASH + DOUBLE_QUOTE),
    ("\n", BACKSLASH + "n"),
    ("\r", BACKSLASH + "r"),
    ("\t", BACKSLASH + "t"),
)

_UNESCAPES = {
    BACKSLASH: BACKSLASH,
    DOUBLE_QUOTE: DOUBLE_QUOTE,
    SINGLE_QUOTE: SINGLE_QUOTE,
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def looks_numeric(value: str) -> bool:
    """Check whether a token would be read back as a number."""
    return bool(_NUMERIC_PATTERN.match(value))


def needs_quoting(value: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """Check if a string must be quoted to survive a round trip.

    Args:
        value: String to check
        delimiter: Active delimiter

    Returns:
        True if the string must be quoted
    """
    if value == "":
        return True
    if value.lower() in _KEYWORDS:
        return True
    if looks_numeric(value):
        return True
    if delimiter in value:
        return True
    if any(char in _STRUCTURAL_CHARS for char in value):
        return True
    if value != value.strip():
        return True
    if DOUBLE_QUOTE in value or SINGLE_QUOTE in value:
        return True
    # A leading dash would read as a list item
    if value.startswith(LIST_ITEM_MARKER):
        return True
    return False


def escape(value: str) -> str:
    """Escape backslash, double quote, newline, carriage return and tab."""
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def unescape(value: str) -> str:
    """Invert :func:`escape`.

    Unknown escape sequences are kept verbatim, backslash included.
    """
    if BACKSLASH not in value:
        return value

    result = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == BACKSLASH and i + 1 < len(value):
            following = value[i + 1]
            if following in _UNESCAPES:
                result.append(_UNESCAPES[following])
            else:
                result.append(char + following)
            i += 2
            continue
        result.append(char)
        i += 1
    return "".join(result)


def quote(value: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Quote and escape a string if it needs quoting, else return it as-is."""
    if needs_quoting(value, delimiter):
        return f"{DOUBLE_QUOTE}{escape(value)}{DOUBLE_QUOTE}"
    return value


def is_quoted(value: str) -> bool:
    """Check whether ``value`` is exactly one quoted token.

    The opening quote must be closed by the final character, with no
    unescaped matching quote in between.
    """
    if len(value) < 2 or value[0] not in (DOUBLE_QUOTE, SINGLE_QUOTE):
        return False
    quote_char = value[0]
    i = 1
    while i < len(value):
        char = value[i]
        if char == BACKSLASH:
            i += 2
            continue
        if char == quote_char:
            return i == len(value) - 1
        i += 1
    return False


def unquote(value: str) -> str:
    """Strip one pair of matching quotes and unescape the contents.

    Unquoted input is returned stripped of surrounding whitespace.
    """
    value = value.strip()
    if is_quoted(value):
        return unescape(value[1:-1])
    return value
