"""Type definitions for toonify."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, TypedDict, Union

from .constants import DEFAULT_DELIMITER, DEFAULT_INDENT, DEFAULT_LENGTH_MARKER, DEFAULT_MAX_DEPTH

# JSON-compatible types
JsonPrimitive = Union[str, int, float, bool, None]
JsonObject = Dict[str, Any]
JsonArray = List[Any]
JsonValue = Union[JsonPrimitive, JsonArray, JsonObject]

# Delimiter type
Delimiter = str
DelimiterKey = Literal["comma", "tab", "pipe"]


class EncodeOptions(TypedDict, total=False):
    """Options for TOON encoding.

    Attributes:
        indent: Number of spaces per indentation level (default: 2)
        delimiter: Delimiter character or key for arrays (default: comma)
        lengthMarker: Prefix written before array lengths (default: '')
        maxDepth: Maximum nesting depth before encoding fails (default: 100)
    """

    indent: int
    delimiter: Union[Delimiter, DelimiterKey]
    lengthMarker: str
    maxDepth: int


class DecodeOptions(TypedDict, total=False):
    """Options for TOON decoding.

    Attributes:
        strict: Raise on declared-vs-actual count mismatches (default: True)
        indent: Number of spaces per indentation level (default: 2)
        maxDepth: Maximum nesting depth before decoding fails (default: 100)
    """

    strict: bool
    indent: int
    maxDepth: int


@dataclass(frozen=True)
class ResolvedEncodeOptions:
    """Resolved encoding options with defaults applied."""

    indent: int = DEFAULT_INDENT
    delimiter: str = DEFAULT_DELIMITER
    length_marker: str = DEFAULT_LENGTH_MARKER
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class ResolvedDecodeOptions:
    """Resolved decoding options with defaults applied."""

    strict: bool = True
    indent: int = DEFAULT_INDENT
    max_depth: int = DEFAULT_MAX_DEPTH


# Depth type for tracking indentation level
Depth = int


class LineKind(Enum):
    """Classification of a single TOON line, in matching priority order."""

    NAMED_ARRAY_HEADER = "named_array_header"
    BARE_ARRAY_HEADER = "bare_array_header"
    KEY_VALUE = "key_value"
    LIST_ITEM = "list_item"
    BLANK = "blank"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ArrayHeaderInfo:
    """Parsed array header information."""

    length: int
    """Declared array length."""

    delimiter: Delimiter = DEFAULT_DELIMITER
    """Delimiter for this array's values."""

    fields: Optional[Tuple[str, ...]] = None
    """Column names for tabular format (None for non-tabular)."""

    inline: str = ""
    """Text after the colon, stripped."""

    length_marker: str = ""
    """Prefix found before the length."""


@dataclass(frozen=True)
class ParsedLine:
    """A classified line with indentation info."""

    kind: LineKind
    """Line classification."""

    content: str
    """Content after stripping indentation."""

    indent: int
    """Number of leading spaces."""

    depth: Depth
    """Indentation level (indent // indent_size)."""

    line_number: int
    """1-based line number."""

    key: Optional[str] = None
    """Key for key-value lines and named array headers."""

    value: str = ""
    """Value text after ``key:``, or the content after ``- `` for list items."""

    header: Optional[ArrayHeaderInfo] = None
    """Header details for array header lines."""
