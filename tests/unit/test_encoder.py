"""
Unit tests for TOON encoding.
"""
import pytest

from toonify import ConfigurationError, EncodingError, encode


def test_encode_simple_object():
    """Test that object keys are written in insertion order."""
    assert encode({"name": "Alice", "age": 30, "active": True}) == "name: Alice\nage: 30\nactive: true"


def test_encode_tabular_array():
    """Test that uniform flat objects share one header."""
    data = [{"id": 1, "name": "Rui"}, {"id": 2, "name": "Bea"}]
    assert encode(data) == "[2,]{id,name}:\n  1,Rui\n  2,Bea"


def test_encode_named_tabular_array():
    """Test a tabular array under a key."""
    data = {"users": [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bo"}]}
    assert encode(data) == "users[2,]{id,name}:\n  1,Ann\n  2,Bo"


def test_encode_primitive_array():
    """Test that primitive arrays go on the header line."""
    assert encode([1, 2, 3, 4, 5]) == "[5,]: 1,2,3,4,5"
    assert encode({"tags": ["a", "b"]}) == "tags[2,]: a,b"


@pytest.mark.parametrize("delimiter", ["\t", "tab"])
def test_encode_with_tab_delimiter(delimiter):
    """Test the tab delimiter in headers and rows."""
    data = [{"id": 1, "name": "Rui Almeida"}]
    assert encode(data, {"delimiter": delimiter}) == "[1\t]{id,name}:\n  1\tRui Almeida"


@pytest.mark.parametrize("delimiter", ["|", "pipe"])
def test_encode_with_pipe_delimiter(delimiter):
    """Test the pipe delimiter in headers and rows."""
    data = [{"id": 1, "name": "a,b"}]
    assert encode(data, {"delimiter": delimiter}) == "[1|]{id,name}:\n  1|a,b"


def test_encode_nested_object():
    """Test that nested objects open an indented block."""
    data = {"user": {"name": "Rui", "address": {"city": "Porto", "zip": "10001"}}}
    assert encode(data) == 'user:\n  name: Rui\n  address:\n    city: Porto\n    zip: "10001"'


def test_encode_special_values():
    """Test null, booleans and numbers."""
    data = {"null_value": None, "true_value": True, "false_value": False, "number": 42, "float": 3.14}
    expected = "null_value: null\ntrue_value: true\nfalse_value: false\nnumber: 42\nfloat: 3.14"
    assert encode(data) == expected


def test_encode_non_finite_floats_as_null():
    """Test that NaN and infinities collapse to null."""
    assert encode({"a": float("nan"), "b": float("inf")}) == "a: null\nb: null"


def test_encode_empty_string():
    """Test that the empty string is quoted."""
    assert encode({"empty": ""}) == 'empty: ""'


def test_encode_string_with_spaces_unquoted():
    """Test that inner spaces do not force quoting."""
    assert encode({"message": "Hello World"}) == "message: Hello World"


def test_encode_empty_containers():
    """Test empty arrays and objects."""
    assert encode([]) == "[0]:"
    assert encode({"items": []}) == "items[0]:"
    assert encode({"meta": {}}) == "meta:"
    assert encode({}) == ""


def test_encode_length_marker():
    """Test that the length marker prefixes counts."""
    assert encode({"tags": ["a", "b"]}, {"lengthMarker": "#"}) == "tags[#2,]: a,b"
    assert encode({"tags": []}, {"lengthMarker": "#"}) == "tags[#0]:"


def test_encode_list_array_with_scalars_and_objects():
    """Test mixed arrays as dash items."""
    data = {"items": [1, {"a": 1}, "x"]}
    assert encode(data) == "items[3,]:\n  - 1\n  - a: 1\n  - x"


def test_encode_inline_list_objects():
    """Test that small flat objects are written inline."""
    data = [{"a": 1, "b": "x, y"}, {"c": 3}]
    assert encode(data) == '[2,]:\n  - a: 1, b: "x, y"\n  - c: 3'


def test_encode_inline_object_quotes_commas_for_any_delimiter():
    """Test that inline pairs quote commas even with another delimiter."""
    data = [{"a": "x,y"}, {"b": 1}]
    assert encode(data, {"delimiter": "|"}) == '[2|]:\n  - a: "x,y"\n  - b: 1'


def test_encode_complex_list_object():
    """Test continuation lines for nested list objects."""
    data = [{"id": 1, "tags": ["x", "y"], "meta": {"k": "v"}}]
    expected = "[1,]:\n  - id: 1\n    tags[2,]: x,y\n    meta:\n      k: v"
    assert encode(data) == expected


def test_encode_list_object_with_nested_first_key():
    """Test that a nested first value goes two levels below the dash."""
    data = [{"meta": {"k": "v"}, "id": 1}]
    assert encode(data) == "[1,]:\n  - meta:\n      k: v\n    id: 1"


def test_encode_list_object_with_array_first_key():
    """Test that an array first value is a bare header two levels below the dash."""
    data = [{"tags": ["a"], "id": 1}]
    assert encode(data) == "[1,]:\n  - tags:\n      [1,]: a\n    id: 1"


def test_encode_wide_list_object():
    """Test that objects with more than five keys use continuation lines."""
    data = [{"a": 1, "b": 2, "c": 3, "d": 4, "e": 5, "f": 6}, {"z": 0}]
    expected = "[2,]:\n  - a: 1\n    b: 2\n    c: 3\n    d: 4\n    e: 5\n    f: 6\n  - z: 0"
    assert encode(data) == expected


def test_encode_nested_arrays():
    """Test arrays of arrays."""
    assert encode([[1, 2], [3]]) == "[2,]:\n  -\n    [2,]: 1,2\n  -\n    [1,]: 3"


def test_encode_empty_object_in_list():
    """Test that an empty object is a bare dash."""
    assert encode([{}, 1]) == "[2,]:\n  -\n  - 1"


def test_encode_quotes_keys_that_are_not_identifiers():
    """Test key quoting."""
    assert encode({"first name": "Bob", "ok_key": 1}) == '"first name": Bob\nok_key: 1'
    assert encode([{"a b": 1}, {"a b": 2}]) == '[2,]{"a b"}:\n  1\n  2'


def test_encode_quotes_ambiguous_strings():
    """Test quoting of strings that would read back differently."""
    data = {"a": "-abc", "b": "true", "c": "12", "d": "x: y", "e": "a,b"}
    assert encode(data) == 'a: "-abc"\nb: "true"\nc: "12"\nd: "x: y"\ne: "a,b"'


def test_encode_custom_indent():
    """Test indentation width."""
    assert encode({"a": {"b": 1}}, {"indent": 4}) == "a:\n    b: 1"
    assert encode({"a": {"b": 1}}, {"indent": 0}) == "a:\nb: 1"


def test_encode_json_string():
    """Test that JSON text is parsed before encoding."""
    assert encode('{"name": "Rui Almeida", "age": 37}') == "name: Rui Almeida\nage: 37"
    assert encode("  [1, 2]  ") == "[2,]: 1,2"


def test_encode_invalid_json_string():
    """Test that malformed JSON text raises EncodingError."""
    with pytest.raises(EncodingError):
        encode('{"name": }')


def test_encode_json_rejects_nan_constants():
    """Test that NaN in JSON text is rejected."""
    with pytest.raises(EncodingError):
        encode('{"a": NaN}')


def test_encode_plain_string():
    """Test that non-JSON strings are encoded as scalars."""
    assert encode("hello") == "hello"
    assert encode("a: b") == '"a: b"'
    assert encode("") == '""'


def test_encode_root_scalars():
    """Test scalar documents."""
    assert encode(None) == "null"
    assert encode(True) == "true"
    assert encode(42) == "42"
    assert encode(2.5) == "2.5"


@pytest.mark.parametrize("options", [{"delimiter": ";"}, {"delimiter": ""}, {"delimiter": 1}])
def test_encode_invalid_delimiter(options):
    """Test that unsupported delimiters raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        encode({"a": 1}, options)


@pytest.mark.parametrize("options", [{"indent": -1}, {"indent": "2"}, {"lengthMarker": 5}, {"maxDepth": 0}])
def test_encode_invalid_options(options):
    """Test that invalid option values raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        encode({"a": 1}, options)


def test_encode_unsupported_type():
    """Test that unsupported values raise EncodingError."""
    with pytest.raises(EncodingError):
        encode({"x": object()})


def test_encode_cyclic_structure():
    """Test that cycles hit the depth limit instead of recursing forever."""
    data = []
    data.append(data)
    with pytest.raises(EncodingError):
        encode(data)


def test_encode_max_depth():
    """Test the configurable nesting limit."""
    data = {"a": {"b": {"c": 1}}}
    assert encode(data, {"maxDepth": 3}) == "a:\n  b:\n    c: 1"
    with pytest.raises(EncodingError):
        encode(data, {"maxDepth": 2})


def test_encode_quotes_backslashes():
    """Test that backslashes are quoted so they cannot escape a delimiter."""
    assert encode({"paths": ["dir\\", "x"]}) == 'paths[2,]: "dir\\\\",x'
    assert encode([{"p": "a\\", "q": "b"}], {"delimiter": "|"}) == '[1|]{p,q}:\n  "a\\\\"|b'
    assert encode({"path": "a\\b"}) == 'path: "a\\\\b"'


@pytest.mark.parametrize("marker", ["n1", "[", "]", ",", "|", "\t", "#\n"])
def test_encode_rejects_unreadable_length_marker(marker):
    """Test that markers the header grammar cannot read back are rejected."""
    with pytest.raises(ConfigurationError):
        encode({"x": [1, 1, 1]}, {"lengthMarker": marker})


@pytest.mark.parametrize("marker", ["#", "n=", "len "])
def test_encode_accepts_readable_length_marker(marker):
    """Test that markers without digits, brackets or delimiters are kept."""
    assert encode({"x": [1, 2]}, {"lengthMarker": marker}) == f"x[{marker}2,]: 1,2"
