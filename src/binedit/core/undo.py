"""
Undo and redo logs of byte snapshots.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class UndoEntry:
    """Bytes found at an absolute offset at one point of an edit."""
    offset: int
    data: bytes


class UndoRedoLog:
    """A stack of snapshots. Every edit pushes its before and after bytes."""

    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: UndoEntry) -> None:
        self._entries.append(entry)

    def pop(self) -> Optional[UndoEntry]:
        """Remove and return the most recent entry, or None when empty."""

        if not self._entries:
            return None

        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()
