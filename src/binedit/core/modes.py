"""
Numeric input modes and element sizes for the edit decoder.
"""

from enum import Enum
from typing import TypeVar

E = TypeVar('E', bound=Enum)


class ElementMode(Enum):
    """Radix an element is typed in, with the digits needed per byte."""

    HEX = (16, 2)
    DEC = (10, 3)
    OCT = (8, 3)
    BIN = (2, 8)

    @property
    def radix(self) -> int:
        return self.value[0]

    @property
    def digits_per_byte(self) -> int:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> 'ElementMode':
        """Look up a mode by its short name ("hex", "dec", "oct", "bin")."""

        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown element mode: {name}") from None


class ElementSize(Enum):
    """Width in bytes of the element being edited."""

    BYTE = 1
    WORD = 2
    DWORD = 4
    QWORD = 8

    @classmethod
    def from_name(cls, name: str) -> 'ElementSize':
        """Look up a size by its short name ("byte", "word", "dword", "qword")."""

        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown element size: {name}") from None


def input_width(mode: ElementMode, size: ElementSize) -> int:
    """Number of digit slots one element occupies in the given mode."""

    return size.value * mode.digits_per_byte


def cycle(member: E, step: int = 1) -> E:
    """Return the member `step` places after `member`, wrapping around."""

    members = list(type(member))
    index = members.index(member)

    return members[(index + step) % len(members)]
