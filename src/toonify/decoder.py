"""Core TOON decoding functionality.

The decoder is a recursive-descent parser over pre-classified lines. Every
parse step receives the index of the line it starts at and returns the
parsed value together with the index of the first line it did not consume.
A block is the run of lines starting at its first non-blank line and
ending before the next non-blank line indented less than that first line.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from .constants import COMMA, DEFAULT_INDENT, DEFAULT_MAX_DEPTH
from .errors import ConfigurationError, DecodingError
from .scanner import classify_content, parse_scalar, scan_lines, split_delimited
from .types import (
    ArrayHeaderInfo,
    DecodeOptions,
    Depth,
    JsonArray,
    JsonObject,
    JsonValue,
    LineKind,
    ParsedLine,
    ResolvedDecodeOptions,
)

logger = logging.getLogger(__name__)

_ENTRY_KINDS = (LineKind.KEY_VALUE, LineKind.NAMED_ARRAY_HEADER)


def decode(text: str, options: Optional[DecodeOptions] = None) -> JsonValue:
    """Decode TOON text into a Python value.

    Args:
        text: TOON-formatted string
        options: Optional decoding options

    Returns:
        Decoded value (dict, list or scalar)

    Raises:
        ConfigurationError: If the options are invalid
        DecodingError: If the text is empty, nests too deeply, or (in strict
            mode) a declared count or key does not match the content
    """
    resolved_options = resolve_decode_options(options)

    if not text or not text.strip():
        raise DecodingError("Empty TOON string")

    lines = scan_lines(text, resolved_options.indent)
    return _Parser(lines, resolved_options).parse_document()


def decode_to_json(text: str, options: Optional[DecodeOptions] = None, **json_kwargs: Any) -> str:
    """Decode TOON text and serialize the result as JSON.

    Args:
        text: TOON-formatted string
        options: Optional decoding options
        **json_kwargs: Formatting options passed to ``json.dumps``
            (defaults: ``indent=2``, ``ensure_ascii=False``)

    Returns:
        JSON string
    """
    json_kwargs.setdefault("indent", 2)
    json_kwargs.setdefault("ensure_ascii", False)
    return json.dumps(decode(text, options), **json_kwargs)


def resolve_decode_options(options: Optional[DecodeOptions]) -> ResolvedDecodeOptions:
    """Resolve decoding options with defaults.

    Raises:
        ConfigurationError: If indent or maxDepth is not a positive integer
    """
    if options is None:
        return ResolvedDecodeOptions()

    strict = options.get("strict", True)
    indent = options.get("indent", DEFAULT_INDENT)
    max_depth = options.get("maxDepth", DEFAULT_MAX_DEPTH)

    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 1:
        raise ConfigurationError(f"Indent must be an integer >= 1 for decoding, got {indent!r}")

    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ConfigurationError(f"Maximum depth must be a positive integer, got {max_depth!r}")

    return ResolvedDecodeOptions(strict=bool(strict), indent=indent, max_depth=max_depth)


class _Parser:
    """Recursive-descent parser over one document's lines."""

    def __init__(self, lines: List[ParsedLine], options: ResolvedDecodeOptions) -> None:
        self.lines = lines
        self.options = options

    @property
    def strict(self) -> bool:
        return self.options.strict

    def parse_document(self) -> JsonValue:
        start = self._next_content(0)
        if start is None:
            raise DecodingError("Empty TOON string")

        value, end = self.parse_block(start, 0)

        leftover = self._next_content(end)
        if leftover is not None:
            logger.debug("Ignoring content after root block from line %d", self.lines[leftover].line_number)
        return value

    # Blocks

    def parse_block(self, start: int, nesting: int) -> Tuple[JsonValue, int]:
        """Parse the block whose first non-blank line is at ``start``.

        The first line decides what the block is: entries make an object, a
        bare array header makes that array, list items make an array, and a
        single unrecognized line is a scalar.
        """
        first = self.lines[start]
        base = first.depth

        if first.kind is LineKind.BARE_ARRAY_HEADER:
            value, end = self.parse_array(first, start, nesting)
            return value, self._skip_block(end, base)

        nesting = self._enter(nesting, first)

        if first.kind in _ENTRY_KINDS:
            return self.parse_object(start, base, nesting)

        if first.kind is LineKind.LIST_ITEM:
            return self.parse_list_items(start, base - 1, None, nesting)

        end = self._block_end(start + 1, base)
        if self._next_content(start + 1, end) is None:
            return parse_scalar(first.content), end
        return self.parse_object(start, base, nesting)

    def parse_object(self, start: int, base: Depth, nesting: int) -> Tuple[JsonObject, int]:
        obj: JsonObject = {}
        i = start
        while i < len(self.lines):
            line = self.lines[i]
            if line.kind is LineKind.BLANK:
                i += 1
                continue
            if line.depth < base:
                break
            if line.depth == base and line.kind in _ENTRY_KINDS:
                key, value, i = self.parse_entry(line, i, nesting)
                self._set_key(obj, key, value, line)
                continue
            self._skip(line, "not an object entry")
            i += 1
        return obj, i

    def parse_entry(self, line: ParsedLine, index: int, nesting: int) -> Tuple[str, JsonValue, int]:
        """Parse a ``key: value`` line or named array header.

        ``line`` may be synthesized from a list item, so its depth is used
        rather than the depth of ``self.lines[index]``.
        """
        key = line.key or ""
        if line.kind is LineKind.NAMED_ARRAY_HEADER:
            value, end = self.parse_array(line, index, nesting)
            return key, value, end
        if line.value:
            return key, parse_scalar(line.value), index + 1
        value, end = self.parse_nested(index, line.depth, nesting)
        return key, value, end

    def parse_nested(self, index: int, owner_depth: Depth, nesting: int) -> Tuple[JsonValue, int]:
        """Parse the block after ``index`` if it is indented past ``owner_depth``.

        With no deeper block the value is an empty object.
        """
        following = self._next_content(index + 1)
        if following is not None and self.lines[following].depth > owner_depth:
            return self.parse_block(following, nesting)
        return {}, index + 1

    # Arrays

    def parse_array(self, line: ParsedLine, index: int, nesting: int) -> Tuple[JsonArray, int]:
        """Parse an array from its header line.

        An inline value is a primitive array, a column list introduces
        tabular rows, and otherwise the following list items are read.
        """
        header = line.header
        if header is None:
            raise DecodingError("Expected an array header", line.line_number)
        nesting = self._enter(nesting, line)

        if header.inline:
            values = [parse_scalar(part) for part in split_delimited(header.inline, header.delimiter)]
            return self._check_count(values, header.length, "Array length", line), index + 1

        if header.fields is not None:
            return self.parse_tabular_rows(line, header, index)

        return self.parse_list_items(index + 1, line.depth, line, nesting)

    def parse_tabular_rows(self, line: ParsedLine, header: ArrayHeaderInfo, index: int) -> Tuple[JsonArray, int]:
        fields = list(header.fields or ())
        if self.strict and len(set(fields)) != len(fields):
            raise DecodingError(f"Duplicate column names in {fields}", line.line_number)

        rows: JsonArray = []
        i = index + 1
        while i < len(self.lines):
            row_line = self.lines[i]
            if row_line.kind is LineKind.BLANK:
                i += 1
                continue
            if row_line.depth <= line.depth:
                break
            rows.append(self._parse_row(row_line, fields, header.delimiter))
            i += 1

        return self._check_count(rows, header.length, "Tabular row count", line), i

    def _parse_row(self, row_line: ParsedLine, fields: List[str], delimiter: str) -> JsonObject:
        values = split_delimited(row_line.content, delimiter)
        if len(values) != len(fields):
            if self.strict:
                raise DecodingError(
                    f"Row has {len(values)} values but header declares {len(fields)} columns",
                    row_line.line_number,
                )
            logger.debug(
                "Line %d: row has %d values for %d columns", row_line.line_number, len(values), len(fields)
            )
        padded: List[Optional[str]] = [*values[: len(fields)], *([None] * (len(fields) - len(values)))]
        return {field: parse_scalar(value) for field, value in zip(fields, padded)}

    def parse_list_items(
        self, start: int, parent_depth: Depth, header_line: Optional[ParsedLine], nesting: int
    ) -> Tuple[JsonArray, int]:
        """Read ``- `` items indented past ``parent_depth``.

        Items are taken at the depth of the first one; other lines in the
        block are skipped. With a header line the declared length is
        enforced.
        """
        items: JsonArray = []
        item_depth: Optional[Depth] = None
        i = start
        while i < len(self.lines):
            line = self.lines[i]
            if line.kind is LineKind.BLANK:
                i += 1
                continue
            if line.depth <= parent_depth:
                break
            if line.kind is LineKind.LIST_ITEM and (item_depth is None or line.depth == item_depth):
                item_depth = line.depth
                value, i = self.parse_list_item(line, i, nesting)
                items.append(value)
                continue
            self._skip(line, "not a list item")
            i += 1

        if header_line is not None and header_line.header is not None:
            items = self._check_count(items, header_line.header.length, "List array length", header_line)
        return items, i

    def parse_list_item(self, line: ParsedLine, index: int, nesting: int) -> Tuple[JsonValue, int]:
        """Parse one ``- `` item.

        The content after the dash is, in order: an inline object of two or
        more comma-separated pairs, an object whose first entry is on the
        dash line, a bare array header, or a scalar. A bare dash takes the
        block below it.
        """
        content = line.value
        if not content:
            return self.parse_nested(index, line.depth, nesting)

        inline = self._parse_inline_object(content, line)
        if inline is not None:
            self._enter(nesting, line)
            return inline, index + 1

        # Entries on the dash line sit one level deeper than the dash itself
        inner = classify_content(content, line.indent, line.depth + 1, line.line_number)

        if inner.kind in _ENTRY_KINDS:
            return self._parse_list_item_object(line, inner, index, nesting)

        if inner.kind is LineKind.BARE_ARRAY_HEADER:
            return self.parse_array(inner, index, nesting)

        return parse_scalar(content), index + 1

    def _parse_list_item_object(
        self, line: ParsedLine, first: ParsedLine, index: int, nesting: int
    ) -> Tuple[JsonObject, int]:
        obj: JsonObject = {}
        nesting = self._enter(nesting, line)
        key, value, i = self.parse_entry(first, index, nesting)
        obj[key] = value

        # Continuation keys: entries indented past the dash
        while i < len(self.lines):
            peek = self.lines[i]
            if peek.kind is LineKind.BLANK:
                i += 1
                continue
            if peek.depth <= line.depth:
                break
            if peek.kind in _ENTRY_KINDS:
                key, value, i = self.parse_entry(peek, i, nesting)
                self._set_key(obj, key, value, peek)
                continue
            if self.strict:
                raise DecodingError("Expected 'key: value' in list item continuation", peek.line_number)
            self._skip(peek, "not a continuation key")
            i += 1

        return obj, i

    def _parse_inline_object(self, content: str, line: ParsedLine) -> Optional[JsonObject]:
        parts = split_delimited(content, COMMA)
        if len(parts) < 2:
            return None

        pairs = []
        for part in parts:
            pair = classify_content(part, line.indent, line.depth, line.line_number)
            if pair.kind is not LineKind.KEY_VALUE or not pair.value:
                return None
            pairs.append(pair)

        obj: JsonObject = {}
        for pair in pairs:
            self._set_key(obj, pair.key or "", parse_scalar(pair.value), line)
        return obj

    # Helpers

    def _enter(self, nesting: int, line: ParsedLine) -> int:
        nesting += 1
        if nesting > self.options.max_depth:
            raise DecodingError(f"Maximum nesting depth of {self.options.max_depth} exceeded", line.line_number)
        return nesting

    def _next_content(self, start: int, stop: Optional[int] = None) -> Optional[int]:
        stop = len(self.lines) if stop is None else stop
        for i in range(start, stop):
            if self.lines[i].kind is not LineKind.BLANK:
                return i
        return None

    def _block_end(self, start: int, base: Depth) -> int:
        """Return the index of the first non-blank line shallower than ``base``."""
        i = start
        while i < len(self.lines):
            line = self.lines[i]
            if line.kind is not LineKind.BLANK and line.depth < base:
                break
            i += 1
        return i

    def _skip_block(self, start: int, base: Depth) -> int:
        end = self._block_end(start, base)
        for line in self.lines[start:end]:
            if line.kind is not LineKind.BLANK:
                self._skip(line, "outside any structure")
        return end

    def _skip(self, line: ParsedLine, reason: str) -> None:
        logger.debug("Skipping line %d (%s): %r", line.line_number, reason, line.content)

    def _set_key(self, obj: Dict[str, Any], key: str, value: JsonValue, line: ParsedLine) -> None:
        if key in obj and self.strict:
            raise DecodingError(f"Duplicate key {key!r}", line.line_number)
        obj[key] = value

    def _check_count(self, values: List[Any], declared: int, what: str, line: ParsedLine) -> List[Any]:
        if len(values) == declared:
            return values
        if self.strict:
            raise DecodingError(f"{what} mismatch: expected {declared}, found {len(values)}", line.line_number)
        logger.debug("Line %d: %s expected %d, found %d", line.line_number, what, declared, len(values))
        return values[:declared]
