"""
toonify - Token-Oriented Object Notation for Python

A compact, line-oriented data format for embedding structured data in LLM
prompts, round-trippable to JSON.
"""

from .decoder import decode, decode_to_json
from .encoder import encode
from .errors import ConfigurationError, DecodingError, EncodingError, ToonError
from .quoting import escape, needs_quoting, quote, unescape, unquote
from .sniff import (
    SyntaxReport,
    detect_delimiter,
    extract_from_markdown,
    locate_toon_block,
    looks_like_toon,
    validate_syntax,
)
from .types import DecodeOptions, Delimiter, DelimiterKey, EncodeOptions

__version__ = "0.1.0"
__all__ = [
    "encode",
    "decode",
    "decode_to_json",
    "locate_toon_block",
    "extract_from_markdown",
    "looks_like_toon",
    "detect_delimiter",
    "validate_syntax",
    "SyntaxReport",
    "needs_quoting",
    "quote",
    "unquote",
    "escape",
    "unescape",
    "ToonError",
    "ConfigurationError",
    "EncodingError",
    "DecodingError",
    "Delimiter",
    "DelimiterKey",
    "EncodeOptions",
    "DecodeOptions",
]
