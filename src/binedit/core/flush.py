"""
Writing pending patches back to disk in aligned blocks.
"""

import os
import logging

from ..config import WRITE_BLOCK
from .overlay import PatchOverlay
from .window import ByteWindow, read_block

log = logging.getLogger(__name__)


def align_down(offset: int, block: int) -> int:
    return offset & ~(block - 1)


def align_up(offset: int, block: int) -> int:
    return align_down(offset + block - 1, block)


def flush_patches(path: str, overlay: PatchOverlay, file_size: int,
                  block: int = WRITE_BLOCK) -> int:
    """
    Persist the overlay into `path` with read-modify-write of aligned regions.

    Patches are visited in ascending offset order. Each one maps to the
    block-aligned region covering it; a region is written only when it reaches
    further than the last one written, and the whole overlay is re-applied to
    it first, so every patch inside is picked up by a single write. Patches at
    or past `file_size` are dropped: a flush never extends the file.

    If a read or write fails, the patches lying entirely inside regions already
    written are removed from the overlay and the rest are kept.

    Args:
        path: File to write to
        overlay: Pending patches; cleared on success
        file_size: Length of the file when its window was last loaded
        block: Alignment unit, a power of two

    Returns:
        int: Number of regions written
    """

    scratch = ByteWindow(size=block)
    written = []
    prev_end = 0

    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    except OSError as e:
        raise IOError(f"Failed to open {path} for writing: {e}") from e

    try:
        with os.fdopen(fd, 'r+b', buffering=0) as fh:
            file_len = os.fstat(fd).st_size

            for offset, run in list(overlay.range(0, file_size)):
                at = align_down(offset, block)
                end = align_up(offset + len(run), block)

                if end <= prev_end:
                    continue

                prev_end = end
                if at >= file_len:
                    continue

                scratch.offset = at
                scratch.size = end - at
                scratch.working = read_block(fh, scratch.size, at, file_len)
                overlay.apply(scratch)

                os.pwrite(fd, scratch.working[:min(scratch.size, file_len - at)], at)
                written.append((at, min(end, file_len)))
                log.debug("Wrote region %#x-%#x of %s", at, end, path)
    except OSError as e:
        kept = _forget_written(overlay, written)
        log.warning("Flush of %s failed after %d region(s), %d patch(es) kept",
                    path, len(written), kept)
        raise IOError(f"Failed to write {path}: {e}") from e

    dropped = len(overlay) - sum(1 for _ in overlay.range(0, file_size))
    if dropped:
        log.warning("Dropped %d patch(es) past the end of %s", dropped, path)

    overlay.clear()
    log.info("Flushed %s: %d region(s) written", path, len(written))
    return len(written)


def _forget_written(overlay: PatchOverlay, written: list) -> int:
    for at, end in written:
        overlay.discard_within(at, end)

    return len(overlay)
