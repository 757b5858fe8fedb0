"""
Utility functions for numbers, offsets and hex text.
"""

from typing import Iterator, Optional

from ..config import BYTES_PER_LINE, HEX_DIGITS


def parse_number(text: str) -> int:
    """
    Parse an unsigned number typed at the command prompt.

    Args:
        text (str): "0x" prefix for hex, "o" suffix for octal, "b" suffix for
                    binary, decimal otherwise

    Returns:
        int: The parsed value

    Raises:
        ValueError: If the text is not a valid unsigned number
    """

    text = text.strip()

    if text.startswith('0x'):
        digits, radix = text[2:], 16
    elif text.endswith('o'):
        digits, radix = text[:-1], 8
    elif text.endswith('b'):
        digits, radix = text[:-1], 2
    else:
        digits, radix = text, 10

    allowed = HEX_DIGITS if radix == 16 else HEX_DIGITS[:radix]
    if not digits or not all(c in allowed for c in digits):
        raise ValueError(f"Invalid number: {text!r}")

    return int(digits, radix)


def parse_hex_string(hex_str: str) -> Optional[bytes]:
    """
    Parse a hex string into bytes.

    Args:
        hex_str (str): String of hex values (e.g. "FF 00 A5")

    Returns:
        bytes: Parsed bytes or None if invalid
    """

    clean_str = ''.join(hex_str.split())
    if not clean_str or not all(c in HEX_DIGITS for c in clean_str):
        return None

    try:
        return bytes.fromhex(clean_str)
    except ValueError:
        return None


def format_offset(offset: int, width: int = 8) -> str:
    """Format a byte offset as a zero padded hex string."""

    return f"{offset:0{width}x}"


def hexdump_lines(data: bytes, base_offset: int = 0,
                  width: int = BYTES_PER_LINE) -> Iterator[str]:
    """Yield `hexdump -C` style lines for `data` starting at `base_offset`."""

    for start in range(0, len(data), width):
        row = data[start:start + width]
        hex_part = ' '.join(f"{b:02x}" for b in row)
        ascii_part = ''.join(chr(b) if 32 <= b <= 126 else '.' for b in row)

        yield f"{format_offset(base_offset + start)}  {hex_part:<{width * 3 - 1}}  |{ascii_part}|"
