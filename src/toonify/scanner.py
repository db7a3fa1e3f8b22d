"""Line scanning for the TOON decoder.

Every line is classified exactly once into a :class:`LineKind` with its
fields (key, value text, array header) extracted, so the parser dispatches
on the tag instead of re-matching overlapping patterns.
"""

import math
import re
from typing import List, Optional, Tuple

from .constants import (
    BACKSLASH,
    CLOSE_BRACE,
    COLON,
    COMMA,
    DEFAULT_DELIMITER,
    DEFAULT_INDENT,
    DOUBLE_QUOTE,
    FALSE_LITERAL,
    LIST_ITEM_MARKER,
    LIST_ITEM_PREFIX,
    NULL_LITERAL,
    OPEN_BRACE,
    OPEN_BRACKET,
    SPACE,
    TRUE_LITERAL,
)
from .quoting import is_quoted, looks_numeric, unescape, unquote
from .types import ArrayHeaderInfo, Depth, JsonPrimitive, LineKind, ParsedLine

_BARE_KEY_PATTERN = re.compile(r"[A-Za-z_][\w.-]*")

# "[" MARKER? COUNT DELIM? "]"
_HEADER_BRACKET_PATTERN = re.compile(r"\[([^\d\[\]]*)(\d+)([,|\t])?\]")


def scan_lines(text: str, indent_size: int = DEFAULT_INDENT) -> List[ParsedLine]:
    """Split text into classified lines.

    Args:
        text: TOON document
        indent_size: Number of spaces per indentation level

    Returns:
        One ParsedLine per input line, blank lines included
    """
    return [
        classify_line(raw.rstrip("\r"), line_number, indent_size)
        for line_number, raw in enumerate(text.split("\n"), start=1)
    ]


def classify_line(raw: str, line_number: int = 1, indent_size: int = DEFAULT_INDENT) -> ParsedLine:
    """Classify a raw line, measuring its indentation in leading spaces."""
    indent = len(raw) - len(raw.lstrip(SPACE))
    return classify_content(raw.strip(), indent, indent // indent_size, line_number)


def classify_content(content: str, indent: int = 0, depth: Depth = 0, line_number: int = 1) -> ParsedLine:
    """Classify stripped line content.

    Priority: named array header, bare array header, key-value, list item.
    Anything else is unrecognized.

    Args:
        content: Line content without indentation
        indent: Leading spaces of the original line
        depth: Indentation level of the line
        line_number: 1-based line number for error reporting

    Returns:
        Classified line
    """
    if not content:
        return ParsedLine(LineKind.BLANK, content, indent, depth, line_number)

    if content.startswith(OPEN_BRACKET):
        header = _parse_header(content, 0)
        if header is not None:
            return ParsedLine(LineKind.BARE_ARRAY_HEADER, content, indent, depth, line_number, header=header)
    else:
        parsed_key = parse_key(content)
        if parsed_key is not None:
            key, pos = parsed_key
            next_char = content[pos] if pos < len(content) else ""
            if next_char == OPEN_BRACKET:
                header = _parse_header(content, pos)
                if header is not None:
                    return ParsedLine(
                        LineKind.NAMED_ARRAY_HEADER, content, indent, depth, line_number, key=key, header=header
                    )
            elif next_char == COLON:
                value = content[pos + 1 :].strip()
                return ParsedLine(LineKind.KEY_VALUE, content, indent, depth, line_number, key=key, value=value)

    if content == LIST_ITEM_MARKER or content.startswith(LIST_ITEM_PREFIX):
        return ParsedLine(LineKind.LIST_ITEM, content, indent, depth, line_number, value=content[1:].strip())

    return ParsedLine(LineKind.UNRECOGNIZED, content, indent, depth, line_number)


def parse_key(content: str) -> Optional[Tuple[str, int]]:
    """Read a key at the start of ``content``.

    Returns:
        The decoded key and the index just past it, or None
    """
    if content.startswith(DOUBLE_QUOTE):
        end = _find_closing_quote(content, 0)
        if end is None:
            return None
        return unescape(content[1:end]), end + 1

    match = _BARE_KEY_PATTERN.match(content)
    if match:
        return match.group(0), match.end()
    return None


def _find_closing_quote(text: str, start: int) -> Optional[int]:
    quote_char = text[start]
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == BACKSLASH:
            i += 2
            continue
        if char == quote_char:
            return i
        i += 1
    return None


def _find_closing_brace(text: str, start: int) -> Optional[int]:
    in_quotes = False
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == BACKSLASH:
            i += 2
            continue
        if char == DOUBLE_QUOTE:
            in_quotes = not in_quotes
        elif char == CLOSE_BRACE and not in_quotes:
            return i
        i += 1
    return None


def _parse_header(content: str, pos: int) -> Optional[ArrayHeaderInfo]:
    match = _HEADER_BRACKET_PATTERN.match(content, pos)
    if not match:
        return None

    length_marker, length, delimiter = match.group(1), int(match.group(2)), match.group(3)
    pos = match.end()

    fields = None
    if pos < len(content) and content[pos] == OPEN_BRACE:
        close = _find_closing_brace(content, pos)
        if close is None:
            return None
        fields = tuple(unquote(field) for field in split_delimited(content[pos + 1 : close], COMMA))
        pos = close + 1

    if pos >= len(content) or content[pos] != COLON:
        return None

    return ArrayHeaderInfo(
        length=length,
        delimiter=delimiter or DEFAULT_DELIMITER,
        fields=fields,
        inline=content[pos + 1 :].strip(),
        length_marker=length_marker,
    )


def split_delimited(text: str, delimiter: str) -> List[str]:
    """Split by delimiter, respecting double quotes and backslash escapes.

    Args:
        text: Text to split
        delimiter: Delimiter character

    Returns:
        Stripped parts; an empty list for empty text
    """
    result: List[str] = []
    current: List[str] = []
    in_quotes = False
    escape_next = False

    for char in text:
        if escape_next:
            current.append(char)
            escape_next = False
            continue
        if char == BACKSLASH:
            current.append(char)
            escape_next = True
            continue
        if char == DOUBLE_QUOTE:
            in_quotes = not in_quotes
            current.append(char)
            continue
        if char == delimiter and not in_quotes:
            result.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    tail = "".join(current)
    if tail or result:
        result.append(tail.strip())
    return result


def parse_scalar(token: Optional[str]) -> JsonPrimitive:
    """Parse a scalar token.

    Args:
        token: Raw token text; None or blank reads as null

    Returns:
        None, bool, int, float or str
    """
    if token is None:
        return None
    token = token.strip()
    if not token:
        return None

    lowered = token.lower()
    if lowered == NULL_LITERAL:
        return None
    if lowered == TRUE_LITERAL:
        return True
    if lowered == FALSE_LITERAL:
        return False

    if is_quoted(token):
        return unescape(token[1:-1])

    if looks_numeric(token):
        if any(char in token for char in ".eE"):
            number = float(token)
            return number if math.isfinite(number) else None
        return int(token)

    return token
