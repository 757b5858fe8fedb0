"""
Keystroke decoder turning typed digits into element bytes.
"""

from typing import Optional

from ..config import HEX_DIGITS, INSERT_CAPACITY, SKIP_MARKER
from .modes import ElementMode, ElementSize, cycle, input_width

RADIX_DIGITS = {
    ElementMode.HEX: frozenset(HEX_DIGITS),
    ElementMode.DEC: frozenset('0123456789'),
    ElementMode.OCT: frozenset('01234567'),
    ElementMode.BIN: frozenset('01'),
}


class DecodeError(ValueError):
    """The digit buffer does not hold a complete element yet."""


class EditDecoder:
    """
    Collects keystrokes into a fixed row of digit slots.

    Every accepted keystroke lands in the slot under the cursor and triggers a
    decode of the whole element. The cursor then moves one slot on, wrapping
    at the element's width, whether or not the decode succeeded.
    """

    def __init__(self, mode: ElementMode = ElementMode.HEX,
                 size: ElementSize = ElementSize.BYTE) -> None:
        self.slots = [''] * INSERT_CAPACITY
        self.insert_index = 0
        self.mode = mode
        self.size = size

    @property
    def width(self) -> int:
        return input_width(self.mode, self.size)

    @property
    def pending(self) -> str:
        """Digits currently held for the active element, blanks as spaces."""

        return ''.join(slot or ' ' for slot in self.slots[:self.width])

    def accepts(self, char: str) -> bool:
        return len(char) == 1 and (char in HEX_DIGITS or char == SKIP_MARKER)

    def feed(self, char: str) -> Optional[bytes]:
        """
        Take one keystroke.

        Args:
            char: A hex digit, or SKIP_MARKER to keep the slot as it is

        Returns:
            Optional[bytes]: Little-endian element bytes if the slots now
            decode, None otherwise
        """

        if not self.accepts(char):
            return None

        if char != SKIP_MARKER:
            self.slots[self.insert_index] = char

        try:
            run = self.decode()
        except DecodeError:
            run = None

        self.insert_index = (self.insert_index + 1) % self.width
        return run

    def decode(self) -> bytes:
        """Parse the element's slots in the active radix."""

        text = ''.join(self.slots[:self.width])
        digits = RADIX_DIGITS[self.mode]

        if len(text) != self.width or not all(c in digits for c in text):
            raise DecodeError(f"Incomplete {self.mode.name.lower()} input: {text!r}")

        value = int(text, self.mode.radix)
        if value >> (8 * self.size.value):
            raise DecodeError(f"{text} does not fit in {self.size.value} byte(s)")

        return value.to_bytes(self.size.value, 'little')

    def reset(self) -> None:
        """Put the cursor back on the first slot."""

        self.insert_index = 0

    def set_mode(self, mode: ElementMode) -> None:
        self.mode = mode
        self.reset()

    def set_size(self, size: ElementSize) -> None:
        self.size = size
        self.reset()

    def next_mode(self) -> None:
        self.set_mode(cycle(self.mode, 1))

    def prev_mode(self) -> None:
        self.set_mode(cycle(self.mode, -1))

    def next_size(self) -> None:
        self.set_size(cycle(self.size, 1))

    def prev_size(self) -> None:
        self.set_size(cycle(self.size, -1))
