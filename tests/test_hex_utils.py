import pytest

from binedit.utils.hex_utils import format_offset, hexdump_lines, parse_hex_string, parse_number


@pytest.mark.parametrize("text, value", [
    ("42", 42),
    ("0x1F", 31),
    ("17o", 15),
    ("101b", 5),
])
def test_parse_number(text, value):
    assert parse_number(text) == value


@pytest.mark.parametrize("text", ["", "0x", "12a", "9o", "102b", "-1"])
def test_parse_number_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_number(text)


def test_parse_hex_string():
    assert parse_hex_string("FF 00 a5") == b"\xff\x00\xa5"
    assert parse_hex_string("abc") is None
    assert parse_hex_string("zz") is None
    assert parse_hex_string("") is None


def test_format_offset():
    assert format_offset(255) == "000000ff"
    assert format_offset(255, 4) == "00ff"


def test_hexdump_lines():
    lines = list(hexdump_lines(b"AB\x00" + bytes(range(16)), 0x10))

    assert len(lines) == 2
    assert lines[0].startswith("00000010  41 42 00 00 01")
    assert lines[0].endswith("|AB..............|")
    assert lines[1] == "00000020  0d 0e 0f" + " " * 41 + "|...|"
