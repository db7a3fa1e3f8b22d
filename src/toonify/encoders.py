"""Encoders for different value types."""

from typing import List, Optional

from .constants import COLON, COMMA, LIST_ITEM_MARKER, LIST_ITEM_PREFIX, MAX_INLINE_OBJECT_KEYS
from .normalize import (
    detect_tabular_header,
    is_array_of_primitives,
    is_flat_object,
    is_json_array,
    is_json_object,
    is_json_primitive,
)
from .primitives import encode_key, encode_primitive, format_header, join_encoded_values
from .types import Depth, JsonArray, JsonObject, JsonValue, ResolvedEncodeOptions
from .writer import LineWriter


def encode_value(value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth = 0) -> None:
    """Encode a value to TOON format.

    Args:
        value: Normalized JSON value
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    if is_json_primitive(value):
        writer.push(depth, encode_primitive(value, options.delimiter))
    elif is_json_array(value):
        encode_array(value, options, writer, depth, None)
    elif is_json_object(value):
        encode_object(value, options, writer, depth)


def encode_object(obj: JsonObject, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth) -> None:
    """Encode each key of an object at the given depth."""
    for key, value in obj.items():
        encode_key_value_pair(key, value, options, writer, depth)


def encode_key_value_pair(
    key: str, value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth
) -> None:
    """Encode a key-value pair.

    Scalars share the key's line, arrays get a named header and objects
    open a nested block one level deeper.

    Args:
        key: Key name
        value: Value to encode
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    if is_json_primitive(value):
        writer.push(depth, f"{encode_key(key)}: {encode_primitive(value, options.delimiter)}")
    elif is_json_array(value):
        encode_array(value, options, writer, depth, key)
    elif is_json_object(value):
        writer.push(depth, f"{encode_key(key)}{COLON}")
        encode_object(value, options, writer, depth + 1)


def encode_array(
    arr: JsonArray,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode an array to TOON format.

    Args:
        arr: List array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    if not arr:
        writer.push(depth, format_header(key, 0, None, options.delimiter, options.length_marker))
        return

    tabular_header = detect_tabular_header(arr)
    if tabular_header:
        encode_array_of_objects_as_tabular(arr, tabular_header, options, writer, depth, key)
    elif is_array_of_primitives(arr):
        encode_inline_primitive_array(arr, options, writer, depth, key)
    else:
        encode_mixed_array_as_list_items(arr, options, writer, depth, key)


def encode_inline_primitive_array(
    arr: JsonArray,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode an array of primitives on the header line."""
    encoded_values = [encode_primitive(item, options.delimiter) for item in arr]
    joined = join_encoded_values(encoded_values, options.delimiter)
    header = format_header(key, len(arr), None, options.delimiter, options.length_marker)
    writer.push(depth, f"{header} {joined}")


def encode_array_of_objects_as_tabular(
    arr: List[JsonObject],
    fields: List[str],
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode array of uniform objects in tabular format.

    Args:
        arr: Array of uniform objects
        fields: Field names for header
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    header = format_header(key, len(arr), fields, options.delimiter, options.length_marker)
    writer.push(depth, header)

    for obj in arr:
        row_values = [encode_primitive(obj[field], options.delimiter) for field in fields]
        writer.push(depth + 1, join_encoded_values(row_values, options.delimiter))


def encode_mixed_array_as_list_items(
    arr: JsonArray,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode mixed array as list items.

    Args:
        arr: Mixed array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    header = format_header(key, len(arr), None, options.delimiter, options.length_marker)
    writer.push(depth, header)

    for item in arr:
        if is_json_primitive(item):
            writer.push(depth + 1, f"{LIST_ITEM_PREFIX}{encode_primitive(item, options.delimiter)}")
        elif is_json_object(item):
            encode_object_as_list_item(item, options, writer, depth + 1)
        elif is_json_array(item):
            writer.push(depth + 1, LIST_ITEM_MARKER)
            encode_array(item, options, writer, depth + 2, None)


def encode_object_as_list_item(obj: JsonObject, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth) -> None:
    """Encode object as a list item.

    Small flat objects go on the dash line as ``- k1: v1, k2: v2``. Larger
    or nested objects keep their first key on the dash line and write the
    remaining keys as continuation lines one level deeper.

    Args:
        obj: Object to encode
        options: Resolved encoding options
        writer: Line writer for output
        depth: Depth of the dash line
    """
    if not obj:
        writer.push(depth, LIST_ITEM_MARKER)
        return

    if len(obj) <= MAX_INLINE_OBJECT_KEYS and is_flat_object(obj):
        # Inline pairs are split on commas when read back
        pairs = [f"{encode_key(k)}: {encode_primitive(v, COMMA)}" for k, v in obj.items()]
        writer.push(depth, LIST_ITEM_PREFIX + ", ".join(pairs))
        return

    items = list(obj.items())
    first_key, first_value = items[0]
    if is_json_primitive(first_value):
        encoded_val = encode_primitive(first_value, options.delimiter)
        writer.push(depth, f"{LIST_ITEM_PREFIX}{encode_key(first_key)}: {encoded_val}")
    else:
        writer.push(depth, f"{LIST_ITEM_PREFIX}{encode_key(first_key)}{COLON}")
        if is_json_array(first_value):
            encode_array(first_value, options, writer, depth + 2, None)
        else:
            encode_object(first_value, options, writer, depth + 2)

    for key, value in items[1:]:
        encode_key_value_pair(key, value, options, writer, depth + 1)
