"""
Fixed-size view of a file at a given offset.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import BinaryIO

from ..config import DEFAULT_WINDOW_SIZE, FILL_BYTE

log = logging.getLogger(__name__)


def read_block(fh: BinaryIO, size: int, offset: int, file_len: int) -> bytearray:
    """
    Read `size` bytes at `offset`, padding whatever lies past the end of file.

    Args:
        fh: File object opened for binary reading
        size: Number of bytes the block must hold
        offset: Absolute file offset of the first byte
        file_len: Length of the file on disk

    Returns:
        bytearray: Exactly `size` bytes, FILL_BYTE beyond `file_len`
    """

    buffer = bytearray([FILL_BYTE]) * size

    if offset < file_len:
        fh.seek(offset)
        data = fh.read(size)
        buffer[:len(data)] = data

    return buffer


@dataclass
class ByteWindow:
    """A window over a file holding the bytes last read and the edited copy."""

    size: int = DEFAULT_WINDOW_SIZE
    offset: int = 0
    working: bytearray = field(default_factory=bytearray)
    source: bytearray = field(default_factory=bytearray)
    prev_offset: int = 0
    prev_size: int = 0

    @property
    def end(self) -> int:
        return self.offset + self.size

    def contains(self, offset: int) -> bool:
        return self.offset <= offset < self.end

    def needs_reload(self) -> bool:
        """Check whether offset or size moved since the last load."""

        return self.offset != self.prev_offset or self.size != self.prev_size

    def move_to(self, offset: int) -> None:
        if offset < 0:
            raise ValueError(f"Window offset must not be negative: {offset}")

        self.offset = offset

    def resize(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"Window size must be positive: {size}")

        self.size = size

    def invalidate(self) -> None:
        """Force the next sync to re-read the window from disk."""

        self.prev_size = 0

    def load(self, path: str) -> int:
        """
        (Re)load the window from disk.

        The window is only modified once the read has fully succeeded, so a
        failed load leaves the previous contents in place.

        Args:
            path: File to read from

        Returns:
            int: Length of the file on disk
        """

        try:
            file_len = os.stat(path).st_size
            with open(path, 'rb') as fh:
                data = read_block(fh, self.size, self.offset, file_len)
        except OSError as e:
            raise IOError(f"Failed to read {path} at {self.offset:#x}: {e}") from e

        self.source = data
        self.working = bytearray(data)
        self.prev_offset = self.offset
        self.prev_size = self.size

        log.debug("Loaded %d bytes of %s at %#x", self.size, path, self.offset)
        return file_len
