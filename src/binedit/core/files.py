"""
Per-file editing state and the table of open files.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..utils.search import HitGroups, SearchEngine
from .flush import flush_patches
from .overlay import PatchOverlay
from .undo import UndoEntry, UndoRedoLog
from .window import ByteWindow

log = logging.getLogger(__name__)


@dataclass
class FileRecord:
    """Everything owned by one open file."""
    path: str
    size: int = 0
    window: ByteWindow = field(default_factory=ByteWindow)
    overlay: PatchOverlay = field(default_factory=PatchOverlay)
    undo_log: UndoRedoLog = field(default_factory=UndoRedoLog)
    redo_log: UndoRedoLog = field(default_factory=UndoRedoLog)
    hits: HitGroups = field(default_factory=HitGroups)

    @property
    def modified(self) -> bool:
        return bool(self.overlay)

    def sync(self) -> None:
        """Reload the window if it moved, then lay the pending patches over it."""

        if self.window.needs_reload():
            self.size = self.window.load(self.path)

        self.overlay.apply(self.window)

    def load_window(self, size: int, offset: int) -> None:
        """Point the window at `offset` with `size` bytes and sync it."""

        old_size, old_offset = self.window.size, self.window.offset
        try:
            self.window.resize(size)
            self.window.move_to(offset)
            self.sync()
        except (IOError, ValueError):
            self.window.size, self.window.offset = old_size, old_offset
            raise

    def commit(self, pos: int, run: bytes) -> bool:
        """
        Splice `run` into the window at local index `pos` as one undoable edit.

        The window is synced first if it moved since it was last loaded,
        so the pre-edit snapshot always holds the bytes at its new offset.

        Returns:
            bool: False if the run does not fit inside the loaded window
        """

        window = self.window
        if window.needs_reload():
            self.sync()

        end = pos + len(run)

        if pos < 0 or end > len(window.working):
            return False

        key = window.offset + pos
        self.undo_log.push(UndoEntry(key, bytes(window.working[pos:end])))
        window.working[pos:end] = run
        self.undo_log.push(UndoEntry(key, bytes(window.working[pos:end])))
        self.overlay.set(key, run)

        return True

    def _replay(self, source: UndoRedoLog, target: UndoRedoLog) -> None:
        replayed = 0
        for _ in range(2):
            entry = source.pop()
            if entry is None:
                continue

            self.overlay.set(entry.offset, entry.data)
            target.push(entry)
            replayed += 1

        if not replayed:
            return

        if self.window.needs_reload():
            self.sync()
        else:
            self.overlay.apply(self.window)

    def undo(self) -> None:
        """Roll back the most recent edit. Does nothing when there is none."""

        self._replay(self.undo_log, self.redo_log)

    def redo(self) -> None:
        """Re-apply the most recently undone edit."""

        self._replay(self.redo_log, self.undo_log)

    def flush(self) -> int:
        """Write all pending patches to disk; returns the regions written."""

        regions = flush_patches(self.path, self.overlay, self.size)
        self.window.invalidate()
        return regions

    def search(self, pattern: Union[str, bytes], engine: Optional[SearchEngine] = None) -> int:
        """Search the file on disk and keep the hits as a new group."""

        group = (engine or SearchEngine()).search(self.path, pattern)
        self.hits.add(group)
        return len(group)

    def _goto_hit(self, offset: Optional[int]) -> None:
        if offset is not None:
            self.window.move_to(offset)

    def select_next_hit(self) -> None:
        group = self.hits.current
        if group:
            self._goto_hit(group.next())

    def select_prev_hit(self) -> None:
        group = self.hits.current
        if group:
            self._goto_hit(group.prev())

    def select_next_group(self) -> None:
        group = self.hits.next()
        if group:
            self._goto_hit(group.current)

    def select_prev_group(self) -> None:
        group = self.hits.prev()
        if group:
            self._goto_hit(group.current)


class FileTable:
    """Open files keyed by handles that stay valid until the file is closed."""

    def __init__(self) -> None:
        self._records: Dict[int, FileRecord] = {}
        self._next_handle = 0

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, handle: int) -> bool:
        return handle in self._records

    def handles(self) -> List[int]:
        return list(self._records)

    def open(self, path: str) -> int:
        """Register `path` and return its handle. Nothing is read yet."""

        handle = self._next_handle
        self._next_handle += 1
        self._records[handle] = FileRecord(path)

        log.debug("Opened %s as handle %d", path, handle)
        return handle

    def get(self, handle: int) -> FileRecord:
        try:
            return self._records[handle]
        except KeyError:
            raise KeyError(f"No open file with handle {handle}") from None

    def close(self, handle: int) -> None:
        record = self._records.pop(handle, None)
        if record is None:
            return

        if record.modified:
            log.warning("Closed %s with %d unflushed patch(es)", record.path, len(record.overlay))

    def next_handle(self, handle: int) -> int:
        return self._step(handle, 1)

    def prev_handle(self, handle: int) -> int:
        return self._step(handle, -1)

    def _step(self, handle: int, step: int) -> int:
        handles = self.handles()
        if not handles:
            raise KeyError("No open files")

        if handle not in self._records:
            return handles[0]

        return handles[(handles.index(handle) + step) % len(handles)]
