"""
Editor facade tying views (tabs) to the table of open files.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Final, List, Optional, Union

from ..utils.hex_utils import parse_number
from ..utils.search import SearchEngine
from .decoder import EditDecoder
from .files import FileRecord, FileTable
from .modes import ElementMode, ElementSize

log = logging.getLogger(__name__)

NO_FILE_STATUS_MESSAGE: Final[str] = "No file open"
UNKNOWN_COMMAND_STATUS_MESSAGE: Final[str] = "Unknown command"
SEARCH_FAILED_STATUS_MESSAGE: Final[str] = "Search failed!"


@dataclass
class View:
    """A tab showing one open file, with its own keystroke decoder."""
    handle: int
    decoder: EditDecoder = field(default_factory=EditDecoder)


class Editor:
    """
    Operations the rendering and command layers call into.

    Views referencing the same handle share that file's window, patches,
    undo logs and hits; only the decoder belongs to the view.
    """

    def __init__(self, search_engine: Optional[SearchEngine] = None) -> None:
        self.files = FileTable()
        self.views: List[View] = []
        self.active_view_index = 0
        self.search_engine = search_engine or SearchEngine()
        self.command_handlers: Dict[str, Callable[[List[str]], str]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[str, Callable[[List[str]], str]]:
        """Set up the prompt command handlers."""

        return {
            'file': self._cmd_file,
            'tab': self._cmd_tab,
            'search': self._cmd_search,
            'block_size': self._cmd_block_size,
            'offset': self._cmd_offset,
            'mode': self._cmd_mode,
            'element': self._cmd_element,
        }

    # Views

    def open(self, path: str) -> int:
        """Open `path` in a new view and make it active; returns the view index."""

        handle = self.files.open(path)
        return self.add_view(handle)

    def add_view(self, handle: int) -> int:
        self.files.get(handle)
        self.views.append(View(handle))
        self.active_view_index = len(self.views) - 1

        return self.active_view_index

    def close_view(self, index: Optional[int] = None) -> None:
        """Close a view, and its file when no other view shows it."""

        if not self.views:
            return

        if index is None:
            index = self.active_view_index

        view = self.views.pop(index)
        if all(v.handle != view.handle for v in self.views):
            self.files.close(view.handle)

        if self.active_view_index >= len(self.views):
            self.active_view_index = max(0, len(self.views) - 1)

    @property
    def current_view(self) -> Optional[View]:
        if not self.views:
            return None

        return self.views[self.active_view_index]

    @property
    def current_file(self) -> Optional[FileRecord]:
        view = self.current_view
        if not view:
            return None

        return self.files.get(view.handle)

    def _require_file(self) -> FileRecord:
        record = self.current_file
        if record is None:
            raise LookupError(NO_FILE_STATUS_MESSAGE)

        return record

    def next_view(self) -> None:
        if self.views:
            self.active_view_index = (self.active_view_index + 1) % len(self.views)

    def prev_view(self) -> None:
        if self.views:
            self.active_view_index = (self.active_view_index - 1) % len(self.views)

    def next_file(self) -> None:
        """Show the next open file in the current view."""

        view = self.current_view
        if view:
            view.handle = self.files.next_handle(view.handle)

    def prev_file(self) -> None:
        view = self.current_view
        if view:
            view.handle = self.files.prev_handle(view.handle)

    # File operations

    def load_window(self, size: int, offset: int) -> None:
        self._require_file().load_window(size, offset)

    def goto(self, offset: int) -> None:
        self._require_file().window.move_to(offset)

    def set_window_size(self, size: int) -> None:
        self._require_file().window.resize(size)

    def sync(self) -> None:
        """Reload the current window if needed and apply pending patches."""

        record = self.current_file
        if record:
            record.sync()

    def edit(self, offset_in_window: int, keystroke: str) -> bool:
        """
        Feed a keystroke to the current view's decoder.

        Args:
            offset_in_window: Position of the element in the window
            keystroke: Hex digit or skip marker

        Returns:
            bool: True if a decoded element was written
        """

        view = self.current_view
        if not view:
            return False

        run = view.decoder.feed(keystroke)
        if run is None:
            return False

        return self.files.get(view.handle).commit(offset_in_window, run)

    def undo(self) -> None:
        record = self.current_file
        if record:
            record.undo()

    def redo(self) -> None:
        record = self.current_file
        if record:
            record.redo()

    def flush(self) -> int:
        return self._require_file().flush()

    def search(self, pattern: Union[str, bytes]) -> int:
        return self._require_file().search(pattern, self.search_engine)

    def select_next_hit(self) -> None:
        record = self.current_file
        if record:
            record.select_next_hit()

    def select_prev_hit(self) -> None:
        record = self.current_file
        if record:
            record.select_prev_hit()

    def select_next_group(self) -> None:
        record = self.current_file
        if record:
            record.select_next_group()

    def select_prev_group(self) -> None:
        record = self.current_file
        if record:
            record.select_prev_group()

    # Prompt commands

    def run_command(self, line: str) -> str:
        """
        Run one prompt command and describe the outcome.

        Failures are reported in the returned message so that the caller's
        interactive loop keeps running.
        """

        words = line.split()
        if len(words) < 2 or words[0] not in self.command_handlers:
            return UNKNOWN_COMMAND_STATUS_MESSAGE

        try:
            return self.command_handlers[words[0]](words[1:])
        except LookupError as e:
            return str(e.args[0]) if e.args else NO_FILE_STATUS_MESSAGE
        except (IOError, ValueError) as e:
            log.debug("Command %r failed: %s", line, e)
            return f"Error: {e}"

    def _cmd_file(self, args: List[str]) -> str:
        if args[0] == 'add' and len(args) > 1:
            self.open(args[1])
            return f"Opened: {args[1]}"

        if args[0] == 'next':
            self.next_file()
        elif args[0] == 'prev':
            self.prev_file()
        else:
            return UNKNOWN_COMMAND_STATUS_MESSAGE

        return f"File: {self._require_file().path}"

    def _cmd_tab(self, args: List[str]) -> str:
        if args[0] == 'next':
            self.next_view()
        elif args[0] == 'prev':
            self.prev_view()
        else:
            return UNKNOWN_COMMAND_STATUS_MESSAGE

        return f"Tab {self.active_view_index + 1} of {len(self.views)}"

    def _cmd_search(self, args: List[str]) -> str:
        try:
            count = self.search(args[0])
        except IOError as e:
            log.warning("Search for %r failed: %s", args[0], e)
            return SEARCH_FAILED_STATUS_MESSAGE

        return f"Found {count} results"

    def _cmd_block_size(self, args: List[str]) -> str:
        size = parse_number(args[0])
        self.set_window_size(size)
        return f"Block size: {size}"

    def _cmd_offset(self, args: List[str]) -> str:
        offset = parse_number(args[0])
        self.goto(offset)
        return f"Offset: {offset:#x}"

    def _cmd_mode(self, args: List[str]) -> str:
        view = self.current_view
        if not view:
            return NO_FILE_STATUS_MESSAGE

        view.decoder.set_mode(ElementMode.from_name(args[0]))
        return f"Mode: {view.decoder.mode.name.lower()}"

    def _cmd_element(self, args: List[str]) -> str:
        view = self.current_view
        if not view:
            return NO_FILE_STATUS_MESSAGE

        view.decoder.set_size(ElementSize.from_name(args[0]))
        return f"Element: {view.decoder.size.name.lower()}"
