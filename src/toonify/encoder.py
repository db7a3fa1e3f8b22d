"""Core TOON encoding functionality."""

import json
from typing import Any, Optional

from .constants import DEFAULT_DELIMITER, DEFAULT_INDENT, DEFAULT_LENGTH_MARKER, DEFAULT_MAX_DEPTH, DELIMITERS, VALID_DELIMITERS
from .encoders import encode_value
from .errors import ConfigurationError, EncodingError
from .normalize import normalize_value
from .types import EncodeOptions, ResolvedEncodeOptions
from .writer import LineWriter

# Characters the header grammar reads as count, bracket or delimiter
_RESERVED_MARKER_CHARS = frozenset("[]\n\r" + "".join(VALID_DELIMITERS))


def encode(value: Any, options: Optional[EncodeOptions] = None) -> str:
    """Encode a value into TOON format.

    A string whose stripped text starts with ``{`` or ``[`` is treated as
    JSON and parsed first; any other string is encoded as a string scalar.

    Args:
        value: The value to encode, or JSON text
        options: Optional encoding options

    Returns:
        TOON-formatted string

    Raises:
        ConfigurationError: If the options are invalid
        EncodingError: If JSON text is malformed or a value cannot be encoded
    """
    resolved_options = resolve_options(options)

    if isinstance(value, str) and _looks_like_json(value):
        value = _parse_json(value)

    normalized = normalize_value(value, resolved_options.max_depth)
    writer = LineWriter(resolved_options.indent)
    encode_value(normalized, resolved_options, writer, 0)
    return writer.to_string()


def resolve_options(options: Optional[EncodeOptions]) -> ResolvedEncodeOptions:
    """Resolve encoding options with defaults.

    Args:
        options: Optional user-provided options

    Returns:
        Resolved options with defaults applied

    Raises:
        ConfigurationError: If the delimiter, indent, length marker or depth limit is invalid
    """
    if options is None:
        return ResolvedEncodeOptions()

    indent = options.get("indent", DEFAULT_INDENT)
    delimiter = options.get("delimiter", DEFAULT_DELIMITER)
    length_marker = options.get("lengthMarker", DEFAULT_LENGTH_MARKER)
    max_depth = options.get("maxDepth", DEFAULT_MAX_DEPTH)

    # Resolve delimiter if it's a key
    if not isinstance(delimiter, str):
        raise ConfigurationError(f"Delimiter must be a string, got {delimiter!r}")
    if delimiter in DELIMITERS:
        delimiter = DELIMITERS[delimiter]
    if delimiter not in VALID_DELIMITERS:
        raise ConfigurationError(f'Invalid delimiter {delimiter!r}. Use ",", "\\t" or "|"')

    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigurationError(f"Indent must be an integer >= 0, got {indent!r}")

    if not isinstance(length_marker, str):
        raise ConfigurationError(f"Length marker must be a string, got {length_marker!r}")
    if any(char.isdigit() or char in _RESERVED_MARKER_CHARS for char in length_marker):
        raise ConfigurationError(f"Length marker cannot contain digits, brackets or delimiters, got {length_marker!r}")

    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ConfigurationError(f"Maximum depth must be a positive integer, got {max_depth!r}")

    return ResolvedEncodeOptions(
        indent=indent,
        delimiter=delimiter,
        length_marker=length_marker,
        max_depth=max_depth,
    )


def _looks_like_json(text: str) -> bool:
    stripped = text.strip()
    return stripped.startswith("{") or stripped.startswith("[")


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not a valid JSON value")


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise EncodingError(f"Invalid JSON: {exc}") from exc
