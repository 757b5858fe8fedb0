"""
binedit: a windowed binary file editor engine.

Files are viewed through a bounded window, edited through an in-memory patch
overlay with undo and redo, flushed to disk in aligned blocks and searched
chunk by chunk without ever being loaded whole.
"""

from .core import Editor, FileRecord, FileTable

__version__ = "0.1.0"

__all__ = ['Editor', 'FileRecord', 'FileTable', '__version__']
