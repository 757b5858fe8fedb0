"""
Core package for windowed binary editing.

This package implements the editing engine: the ByteWindow over a file, the
PatchOverlay of pending edits, the undo and redo logs, the EditDecoder for
typed digits, the aligned flush of patches to disk, and the FileTable and
Editor that tie them together per open file.
"""

from .window import ByteWindow
from .overlay import PatchOverlay
from .undo import UndoEntry, UndoRedoLog
from .decoder import DecodeError, EditDecoder
from .modes import ElementMode, ElementSize
from .flush import flush_patches
from .files import FileRecord, FileTable
from .editor import Editor, View

__all__ = [
    'ByteWindow',
    'PatchOverlay',
    'UndoEntry',
    'UndoRedoLog',
    'DecodeError',
    'EditDecoder',
    'ElementMode',
    'ElementSize',
    'flush_patches',
    'FileRecord',
    'FileTable',
    'Editor',
    'View',
]
