"""
Pending edits kept in memory until they are flushed to disk.
"""

import bisect
from typing import Dict, Iterator, List, Optional, Tuple

from .window import ByteWindow


class PatchOverlay:
    """
    Ordered mapping of absolute file offset to replacement bytes.

    A write to an offset replaces the whole run stored there. Runs at other
    offsets that overlap the written range take the new bytes too, so every
    byte reads as its latest write whatever order the runs are applied in.
    """

    def __init__(self) -> None:
        self._runs: Dict[int, bytes] = {}
        self._keys: List[int] = []
        self._longest = 0

    def __len__(self) -> int:
        return len(self._runs)

    def __bool__(self) -> bool:
        return bool(self._runs)

    def __contains__(self, offset: int) -> bool:
        return offset in self._runs

    def get(self, offset: int) -> Optional[bytes]:
        return self._runs.get(offset)

    def items(self) -> Iterator[Tuple[int, bytes]]:
        """Iterate over (offset, run) pairs in ascending offset order."""

        for key in self._keys:
            yield key, self._runs[key]

    def range(self, start: int, stop: int) -> Iterator[Tuple[int, bytes]]:
        """Iterate over runs whose offset lies in [start, stop)."""

        lo = bisect.bisect_left(self._keys, start)
        hi = bisect.bisect_left(self._keys, stop)

        for key in self._keys[lo:hi]:
            yield key, self._runs[key]

    def overlapping(self, start: int, stop: int) -> Iterator[Tuple[int, bytes]]:
        """Iterate over runs covering at least one byte of [start, stop)."""

        for key, run in self.range(max(0, start - self._longest + 1), stop):
            if key + len(run) > start:
                yield key, run

    def set(self, offset: int, run: bytes) -> None:
        """Store `run` at `offset`, replacing any run already there."""

        run = bytes(run)
        if not run:
            return

        stop = offset + len(run)
        for key, other in list(self.overlapping(offset, stop)):
            if key == offset:
                continue

            lo = max(key, offset)
            hi = min(key + len(other), stop)
            patched = bytearray(other)
            patched[lo - key:hi - key] = run[lo - offset:hi - offset]
            self._runs[key] = bytes(patched)

        if offset not in self._runs:
            bisect.insort(self._keys, offset)

        self._runs[offset] = run
        self._longest = max(self._longest, len(run))

    def apply(self, window: ByteWindow) -> None:
        """Splice every run intersecting the window into its working copy."""

        if len(window.working) != window.size:
            return

        for key, run in self.overlapping(window.offset, window.end):
            lo = max(key, window.offset)
            hi = min(key + len(run), window.end)
            window.working[lo - window.offset:hi - window.offset] = run[lo - key:hi - key]

    def discard_within(self, start: int, stop: int) -> int:
        """Drop runs lying entirely inside [start, stop); return how many."""

        dropped = [key for key, run in self.range(start, stop) if key + len(run) <= stop]

        for key in dropped:
            del self._runs[key]
            self._keys.remove(key)

        return len(dropped)

    def clear(self) -> None:
        self._runs.clear()
        self._keys.clear()
        self._longest = 0
