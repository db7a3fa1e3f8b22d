"""
Unit tests for line classification and token parsing.
"""
import pytest

from toonify.scanner import classify_content, parse_key, parse_scalar, scan_lines, split_delimited
from toonify.types import LineKind


def test_classify_blank():
    """Test empty content."""
    assert classify_content("").kind is LineKind.BLANK


def test_classify_key_value():
    """Test key-value lines and their extracted fields."""
    line = classify_content("name: Alice Smith")
    assert line.kind is LineKind.KEY_VALUE
    assert line.key == "name"
    assert line.value == "Alice Smith"


def test_classify_key_without_value():
    """Test a key that opens a nested block."""
    line = classify_content("address:")
    assert line.kind is LineKind.KEY_VALUE
    assert line.value == ""


def test_classify_named_tabular_header():
    """Test a named header with columns."""
    line = classify_content("users[#2|]{id,\"full name\"}:")
    assert line.kind is LineKind.NAMED_ARRAY_HEADER
    assert line.key == "users"
    assert line.header.length == 2
    assert line.header.delimiter == "|"
    assert line.header.length_marker == "#"
    assert line.header.fields == ("id", "full name")
    assert line.header.inline == ""


def test_classify_bare_header_with_inline_values():
    """Test a bare header carrying its values."""
    line = classify_content("[3,]: a,b,c")
    assert line.kind is LineKind.BARE_ARRAY_HEADER
    assert line.key is None
    assert line.header.inline == "a,b,c"
    assert line.header.fields is None


def test_classify_empty_header_defaults_to_comma():
    """Test that a header without a delimiter symbol uses comma."""
    line = classify_content("items[0]:")
    assert line.kind is LineKind.NAMED_ARRAY_HEADER
    assert line.header.length == 0
    assert line.header.delimiter == ","


def test_classify_list_items():
    """Test dash lines with and without content."""
    item = classify_content("- hello")
    assert item.kind is LineKind.LIST_ITEM
    assert item.value == "hello"
    assert classify_content("-").kind is LineKind.LIST_ITEM
    assert classify_content("-").value == ""


@pytest.mark.parametrize("content", ["-5", "hello world", "!!!", "[abc]: x", "key[2]"])
def test_classify_unrecognized(content):
    """Test lines that match no structural form."""
    assert classify_content(content).kind is LineKind.UNRECOGNIZED


def test_quoted_key_with_colon():
    """Test that a colon inside a quoted key does not end it."""
    line = classify_content('"a: b": 1')
    assert line.kind is LineKind.KEY_VALUE
    assert line.key == "a: b"
    assert line.value == "1"


def test_parse_key():
    """Test bare and quoted keys."""
    assert parse_key("user.name: x") == ("user.name", 9)
    assert parse_key('"x\\"y": 1') == ('x"y', 6)
    assert parse_key('"open') is None
    assert parse_key("9lives") is None


def test_scan_lines_depth_and_line_endings():
    """Test indentation depth, CRLF handling and line numbering."""
    lines = scan_lines("a:\r\n  b: 1\r\n\r\n    c: 2", 2)
    assert [line.depth for line in lines] == [0, 1, 0, 2]
    assert [line.kind for line in lines] == [
        LineKind.KEY_VALUE,
        LineKind.KEY_VALUE,
        LineKind.BLANK,
        LineKind.KEY_VALUE,
    ]
    assert lines[3].line_number == 4
    assert lines[1].value == "1"


def test_scan_lines_custom_indent():
    """Test depth computed with a four-space unit."""
    lines = scan_lines("a:\n    b: 1\n  c: 2", 4)
    assert [line.depth for line in lines] == [0, 1, 0]
    assert lines[2].indent == 2


@pytest.mark.parametrize(
    "text,delimiter,expected",
    [
        ("a,b,c", ",", ["a", "b", "c"]),
        ("a, b , c", ",", ["a", "b", "c"]),
        ('"a,b",c', ",", ['"a,b"', "c"]),
        ('"say \\"hi, there\\"",x', ",", ['"say \\"hi, there\\""', "x"]),
        ("a|b,c", "|", ["a", "b,c"]),
        ("a\tb c", "\t", ["a", "b c"]),
        ("a,,b", ",", ["a", "", "b"]),
        ("a,", ",", ["a", ""]),
        ("", ",", []),
    ],
)
def test_split_delimited(text, delimiter, expected):
    """Test quote-aware splitting."""
    assert split_delimited(text, delimiter) == expected


@pytest.mark.parametrize(
    "token,expected",
    [
        (None, None),
        ("", None),
        ("null", None),
        ("NULL", None),
        ("true", True),
        ("False", False),
        ("42", 42),
        ("-7", -7),
        ("3.5", 3.5),
        ("1e2", 100.0),
        ("1e999", None),
        ('"42"', "42"),
        ('"true"', "true"),
        ('""', ""),
        ("'single'", "single"),
        ('"a\\tb"', "a\tb"),
        ("plain text", "plain text"),
        ("1.2.3", "1.2.3"),
    ],
)
def test_parse_scalar(token, expected):
    """Test scalar token parsing."""
    result = parse_scalar(token)
    assert result == expected
    assert type(result) is type(expected)
