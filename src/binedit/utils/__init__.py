"""
Utility package for number parsing, hex text and file search.
"""

from .hex_utils import (
    parse_number,
    parse_hex_string,
    format_offset,
    hexdump_lines
)
from .search import SearchEngine, HitGroup, HitGroups

__all__ = [
    'parse_number',
    'parse_hex_string',
    'format_offset',
    'hexdump_lines',
    'SearchEngine',
    'HitGroup',
    'HitGroups'
]
