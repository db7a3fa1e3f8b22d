"""Rendering of scalars, keys and array headers."""

import math
import re
from typing import List, Optional

from .constants import (
    CLOSE_BRACE,
    CLOSE_BRACKET,
    COLON,
    COMMA,
    DEFAULT_DELIMITER,
    FALSE_LITERAL,
    NULL_LITERAL,
    OPEN_BRACE,
    OPEN_BRACKET,
    TRUE_LITERAL,
)
from .errors import EncodingError
from .quoting import escape, quote
from .types import JsonPrimitive

_BARE_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def encode_primitive(value: JsonPrimitive, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Encode a primitive value.

    Args:
        value: Primitive value
        delimiter: Active delimiter, used to decide string quoting

    Returns:
        Encoded scalar text
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return encode_number(value)
    if isinstance(value, str):
        return quote(value, delimiter)
    raise EncodingError(f"Unsupported primitive type: {type(value).__name__}")


def encode_number(value: float) -> str:
    """Encode a float, collapsing NaN and infinities to null."""
    if not math.isfinite(value):
        return NULL_LITERAL
    return repr(value)


def encode_key(key: str) -> str:
    """Encode an object key, quoting it unless it is a plain identifier."""
    if _BARE_KEY_PATTERN.match(key):
        return key
    return f'"{escape(key)}"'


def join_encoded_values(values: List[str], delimiter: str) -> str:
    """Join already-encoded values with the delimiter."""
    return delimiter.join(values)


def format_header(
    key: Optional[str],
    length: int,
    fields: Optional[List[str]],
    delimiter: str,
    length_marker: str = "",
) -> str:
    """Format an array header.

    Non-empty arrays carry the delimiter symbol after the count so the
    decoder can split rows and inline values with it.

    Args:
        key: Optional key name
        length: Array length
        fields: Optional field names for tabular format
        delimiter: Delimiter character
        length_marker: Prefix written before the length

    Returns:
        Formatted header string, e.g. ``users[2,]{id,name}:``
    """
    header = encode_key(key) if key is not None else ""
    delimiter_symbol = delimiter if length else ""
    header += f"{OPEN_BRACKET}{length_marker}{length}{delimiter_symbol}{CLOSE_BRACKET}"

    if fields:
        header += OPEN_BRACE + COMMA.join(encode_key(field) for field in fields) + CLOSE_BRACE

    return header + COLON
