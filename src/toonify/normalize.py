"""Value normalization and shape predicates for encoding."""

import dataclasses
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, List, Optional

from .constants import DEFAULT_MAX_DEPTH
from .errors import EncodingError
from .types import JsonArray, JsonObject, JsonValue


def normalize_value(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> JsonValue:
    """Convert a host value into the JSON data model.

    Tuples and sets become lists, mappings become dicts with string keys,
    pydantic models and dataclasses are dumped, dates become ISO strings and
    non-finite floats become None.

    Args:
        value: Any supported Python value
        max_depth: Maximum container nesting depth

    Returns:
        Normalized JSON value

    Raises:
        EncodingError: If a value has an unsupported type or nesting exceeds max_depth
    """
    return _normalize(value, max_depth, 0)


def _normalize(value: Any, max_depth: int, depth: int) -> JsonValue:
    if value is None or isinstance(value, (bool, str, int)):
        return value

    if isinstance(value, float):
        return value if math.isfinite(value) else None

    if isinstance(value, Decimal):
        return _normalize(float(value), max_depth, depth)

    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    if depth >= max_depth:
        raise EncodingError(f"Maximum nesting depth of {max_depth} exceeded")

    if isinstance(value, Mapping):
        return {str(k): _normalize(v, max_depth, depth + 1) for k, v in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        return [_normalize(item, max_depth, depth + 1) for item in value]

    # pydantic v2 then v1
    if callable(getattr(value, "model_dump", None)):
        return _normalize(value.model_dump(), max_depth, depth)
    if hasattr(value, "__fields__") and callable(getattr(value, "dict", None)):
        return _normalize(value.dict(), max_depth, depth)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _normalize(dataclasses.asdict(value), max_depth, depth)

    raise EncodingError(f"Unsupported type for TOON encoding: {type(value).__name__}")


def is_json_primitive(value: Any) -> bool:
    """Check if value is a JSON primitive."""
    return value is None or isinstance(value, (str, int, float, bool))


def is_json_array(value: Any) -> bool:
    """Check if value is a JSON array."""
    return isinstance(value, list)


def is_json_object(value: Any) -> bool:
    """Check if value is a JSON object."""
    return isinstance(value, dict)


def is_array_of_primitives(arr: JsonArray) -> bool:
    """Check if every element of an array is a primitive."""
    return all(is_json_primitive(item) for item in arr)


def is_array_of_objects(arr: JsonArray) -> bool:
    """Check if every element of a non-empty array is an object."""
    return bool(arr) and all(is_json_object(item) for item in arr)


def is_flat_object(obj: JsonObject) -> bool:
    """Check if an object holds only primitive values."""
    return all(is_json_primitive(value) for value in obj.values())


def detect_tabular_header(arr: JsonArray) -> Optional[List[str]]:
    """Return the shared column names if an array qualifies as tabular.

    Every element must be a flat object with the same ordered, non-empty
    key list as the first.

    Args:
        arr: Array to check

    Returns:
        List of keys if tabular, None otherwise
    """
    if not is_array_of_objects(arr):
        return None

    first_keys = list(arr[0].keys())
    if not first_keys:
        return None

    for obj in arr:
        if list(obj.keys()) != first_keys:
            return None
        if not is_flat_object(obj):
            return None

    return first_keys
