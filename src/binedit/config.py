"""
Constants shared by the windowed editing engine and the command line.
"""

from typing import Final

WRITE_BLOCK: Final[int] = 2048
SEARCH_CHUNK: Final[int] = 2048
DEFAULT_WINDOW_SIZE: Final[int] = 2048

FILL_BYTE: Final[int] = 0xFF

INSERT_CAPACITY: Final[int] = 64
SKIP_MARKER: Final[str] = '.'
HEX_DIGITS: Final[str] = '0123456789abcdefABCDEF'

BYTES_PER_LINE: Final[int] = 16
