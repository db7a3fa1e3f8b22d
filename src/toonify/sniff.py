"""Locate TOON payloads inside surrounding text.

LLM responses usually wrap the payload in prose and markdown fences. These
helpers narrow such text down to a standalone TOON document for
:func:`toonify.decode`; they never build values themselves.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import BACKSLASH, COMMA, DOUBLE_QUOTE, PIPE, TAB

logger = logging.getLogger(__name__)

# ```lang\n body ```
_FENCE_PATTERN = re.compile(r"```[ \t]*([\w.+-]*)[^\n]*\n(.*?)```", re.DOTALL)
_TOON_LABEL = "toon"

_HEADER_PATTERNS = (
    # Tabular array: key[N,]{cols}: or [N,]{cols}:
    re.compile(r"^[ \t]*[a-z_][a-z0-9_]*\[#?\d+[,|\t]?\]\{[a-z_][a-z0-9_,]*\}:", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^[ \t]*\[#?\d+[,|\t]?\]\{[a-z_][a-z0-9_,]*\}:", re.IGNORECASE | re.MULTILINE),
    # Array with delimiter symbol: [N,]: or [N|]:
    re.compile(r"^[ \t]*\[#?\d+[,|\t]\]:", re.MULTILINE),
)
_KEY_VALUE_LINE = re.compile(r"^[a-z_][a-z0-9_]*:\s*.+$", re.IGNORECASE)
_MIN_KEY_VALUE_LINES = 2

_TAB_HEADER = re.compile(r"\[[^\d\[\]\n]*\d+\t\]")
_PIPE_HEADER = re.compile(r"\[[^\d\[\]\n]*\d+\|\]")

_INLINE_CODE = re.compile(r"`[^`]+`")
_FENCED_CODE = re.compile(r"```.*?```", re.DOTALL)


@dataclass
class SyntaxReport:
    """Result of a basic syntax check."""

    valid: bool
    errors: List[str] = field(default_factory=list)


def looks_like_toon(text: str) -> bool:
    """Check whether text looks like a TOON document.

    True when an array header with a delimiter symbol or column list starts
    a line, or when at least two lines read as ``key: value``.
    """
    text = text.strip()
    if not text:
        return False

    if any(pattern.search(text) for pattern in _HEADER_PATTERNS):
        return True

    key_value_lines = sum(1 for line in text.split("\n") if _KEY_VALUE_LINE.match(line.strip()))
    return key_value_lines >= _MIN_KEY_VALUE_LINES


def locate_toon_block(text: str) -> Optional[str]:
    """Extract a TOON document from text that may contain markdown fences.

    Preference order: the first fence labeled ``toon`` (any case), the
    first fence whose body looks like TOON, and, only when the text has no
    fences at all, the whole text if it looks like TOON.

    Args:
        text: Text that may contain TOON

    Returns:
        The trimmed TOON document, or None if nothing looks like TOON
    """
    blocks = [(match.group(1), match.group(2).strip()) for match in _FENCE_PATTERN.finditer(text)]

    for label, body in blocks:
        if label.lower() == _TOON_LABEL:
            logger.debug("Found fenced block labeled %r", label)
            return body

    for label, body in blocks:
        if looks_like_toon(body):
            logger.debug("Found fenced block %r that looks like TOON", label or "<unlabeled>")
            return body

    if not blocks:
        trimmed = text.strip()
        if looks_like_toon(trimmed):
            return trimmed

    logger.debug("No TOON content found in %d characters of text", len(text))
    return None


def extract_from_markdown(content: str) -> Optional[str]:
    """Alias of :func:`locate_toon_block`."""
    return locate_toon_block(content)


def detect_delimiter(text: str) -> str:
    """Detect the delimiter declared by the array headers in a TOON document.

    Returns:
        Tab or pipe if a header declares one, otherwise comma
    """
    if _TAB_HEADER.search(text):
        return TAB
    if _PIPE_HEADER.search(text):
        return PIPE
    return COMMA


def strip_markdown_code_blocks(content: str) -> str:
    """Remove fenced and inline code from markdown text."""
    content = _FENCED_CODE.sub("", content)
    content = _INLINE_CODE.sub("", content)
    return content.strip()


def normalize_indentation(content: str, spaces: int = 2) -> str:
    """Snap each line's indentation down to a multiple of ``spaces``."""
    normalized = []
    for line in content.split("\n"):
        stripped = line.lstrip()
        level = (len(line) - len(stripped)) // spaces
        normalized.append(" " * (level * spaces) + stripped)
    return "\n".join(normalized)


def validate_syntax(text: str) -> SyntaxReport:
    """Check that brackets and braces balance on every line.

    Characters inside double-quoted strings are ignored.
    """
    errors = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        brackets = braces = 0
        in_quotes = False
        escape_next = False
        for char in line.strip():
            if escape_next:
                escape_next = False
                continue
            if char == BACKSLASH:
                escape_next = True
                continue
            if char == DOUBLE_QUOTE:
                in_quotes = not in_quotes
                continue
            if in_quotes:
                continue
            if char == "[":
                brackets += 1
            elif char == "]":
                brackets -= 1
            elif char == "{":
                braces += 1
            elif char == "}":
                braces -= 1

        if brackets != 0:
            errors.append(f"Line {line_number}: Unbalanced brackets")
        if braces != 0:
            errors.append(f"Line {line_number}: Unbalanced braces")

    return SyntaxReport(valid=not errors, errors=errors)
