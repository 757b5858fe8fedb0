"""
Command line entry point for binedit.
"""

import sys
import logging
import argparse
from typing import List, Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers.hexdump import HexdumpLexer

from .config import SEARCH_CHUNK
from .core.editor import Editor
from .core.modes import ElementMode, ElementSize, input_width
from .utils.hex_utils import format_offset, hexdump_lines, parse_hex_string, parse_number
from .utils.search import SearchEngine


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        prog="binedit",
        description="binedit - Windowed binary file viewer, patcher and searcher"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every window load and flushed region"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    dump = commands.add_parser("dump", help="Print a window of a file as hex")
    dump.add_argument("path", help="File to read")
    dump.add_argument("--offset", type=parse_number, default=0, help="First byte to show")
    dump.add_argument("--size", type=parse_number, default=256, help="Number of bytes to show")
    dump.add_argument("--color", action="store_true", help="Colorize the output")

    search = commands.add_parser("search", help="List offsets where a pattern occurs")
    search.add_argument("path", help="File to search")
    search.add_argument("pattern", help="Text to look for")
    search.add_argument("--hex", action="store_true", help="Treat the pattern as hex bytes")
    search.add_argument("--chunk", type=parse_number, default=SEARCH_CHUNK,
                        help="Scan stride in bytes")

    poke = commands.add_parser("poke", help="Type digits over a file and save it")
    poke.add_argument("path", help="File to patch")
    poke.add_argument("offset", type=parse_number, help="Offset of the first element")
    poke.add_argument("digits", help="Digits to type, '.' keeps a digit unchanged")
    poke.add_argument("--mode", default="hex", choices=["hex", "dec", "oct", "bin"])
    poke.add_argument("--element", default="byte", choices=["byte", "word", "dword", "qword"])

    return parser.parse_args(argv)


def run_dump(editor: Editor, args: argparse.Namespace) -> None:
    editor.open(args.path)
    editor.load_window(args.size, args.offset)

    record = editor.current_file
    shown = max(0, min(args.size, record.size - args.offset))
    text = '\n'.join(hexdump_lines(bytes(record.window.working[:shown]), args.offset))

    if args.color and text:
        text = highlight(text + '\n', HexdumpLexer(), TerminalFormatter()).rstrip('\n')

    if text:
        print(text)


def run_search(editor: Editor, args: argparse.Namespace) -> None:
    pattern = args.pattern
    if args.hex:
        pattern = parse_hex_string(args.pattern)
        if pattern is None:
            raise ValueError(f"Invalid hex pattern: {args.pattern!r}")

    editor.search_engine = SearchEngine(args.chunk)
    editor.open(args.path)
    count = editor.search(pattern)

    for offset in editor.current_file.hits.current.hits:
        print(format_offset(offset))

    print(f"Found {count} results", file=sys.stderr)


def run_poke(editor: Editor, args: argparse.Namespace) -> None:
    mode = ElementMode.from_name(args.mode)
    size = ElementSize.from_name(args.element)
    width = input_width(mode, size)
    if not args.digits or len(args.digits) % width:
        raise ValueError(
            f"Expected a multiple of {width} digit(s) per {args.element}, got {len(args.digits)}"
        )

    editor.open(args.path)
    view = editor.current_view
    view.decoder.set_mode(mode)
    view.decoder.set_size(size)
    editor.load_window(len(args.digits) // width * size.value, args.offset)

    committed = 0
    for index, char in enumerate(args.digits):
        written = editor.edit((index // width) * size.value, char)
        if written and index % width == width - 1:
            committed += 1

    regions = editor.flush()
    print(f"Committed {committed} element(s), wrote {regions} region(s)")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the application."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    handlers = {
        "dump": run_dump,
        "search": run_search,
        "poke": run_poke,
    }

    try:
        handlers[args.command](Editor(), args)
    except (IOError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
