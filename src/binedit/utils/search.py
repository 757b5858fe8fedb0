"""
Chunked pattern search over files on disk.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..config import SEARCH_CHUNK
from ..core.window import read_block

log = logging.getLogger(__name__)


@dataclass
class HitGroup:
    """Offsets found by one search, with the hit currently selected."""
    pattern: str
    hits: List[int] = field(default_factory=list)
    selected: int = 0

    def __len__(self) -> int:
        return len(self.hits)

    @property
    def current(self) -> Optional[int]:
        if not self.hits:
            return None

        return self.hits[self.selected]

    def next(self) -> Optional[int]:
        if not self.hits:
            return None

        self.selected = (self.selected + 1) % len(self.hits)
        return self.hits[self.selected]

    def prev(self) -> Optional[int]:
        if not self.hits:
            return None

        self.selected = (self.selected - 1) % len(self.hits)
        return self.hits[self.selected]


@dataclass
class HitGroups:
    """Every hit group of one file, in the order the searches ran."""
    groups: List[HitGroup] = field(default_factory=list)
    selected: int = 0

    def __len__(self) -> int:
        return len(self.groups)

    def add(self, group: HitGroup) -> None:
        self.groups.append(group)

    @property
    def current(self) -> Optional[HitGroup]:
        if not self.groups:
            return None

        return self.groups[self.selected]

    def next(self) -> Optional[HitGroup]:
        if not self.groups:
            return None

        self.selected = (self.selected + 1) % len(self.groups)
        return self.groups[self.selected]

    def prev(self) -> Optional[HitGroup]:
        if not self.groups:
            return None

        self.selected = (self.selected - 1) % len(self.groups)
        return self.groups[self.selected]


class SearchEngine:
    """
    Scans a file in fixed chunks for a byte pattern.

    Each chunk is read together with the first len(pattern) - 1 bytes of the
    next one, so a match starting in the chunk is seen even when it crosses
    the boundary. Only the first match of a chunk is recorded and the scan
    then moves on by exactly one chunk.
    """

    def __init__(self, chunk_size: int = SEARCH_CHUNK) -> None:
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive: {chunk_size}")

        self.chunk_size = chunk_size

    def search(self, path: str, pattern: Union[str, bytes]) -> HitGroup:
        """
        Search `path` for `pattern`.

        Args:
            path: File to scan
            pattern: Text (encoded as UTF-8) or raw bytes to look for

        Returns:
            HitGroup: Ascending hit offsets, at most one per chunk
        """

        if isinstance(pattern, str):
            label, needle = pattern, pattern.encode('utf-8')
        else:
            label, needle = pattern.hex(), bytes(pattern)

        if not needle:
            raise ValueError("Search pattern must not be empty")

        group = HitGroup(label)
        extended = self.chunk_size + len(needle) - 1

        try:
            file_len = os.stat(path).st_size
            with open(path, 'rb') as fh:
                offset = 0
                while offset < file_len:
                    block = read_block(fh, extended, offset, file_len)
                    pos = block.find(needle)

                    if pos >= 0 and offset + pos + len(needle) <= file_len:
                        group.hits.append(offset + pos)

                    offset += self.chunk_size
        except OSError as e:
            raise IOError(f"Search failed in {path}: {e}") from e

        log.info("Found %d hit(s) for %r in %s", len(group.hits), label, path)
        return group
