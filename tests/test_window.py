import io

import pytest

from binedit.core.window import ByteWindow, read_block


def test_read_block_pads_past_end_of_file():
    fh = io.BytesIO(b"abc")
    assert read_block(fh, 6, 1, 3) == bytearray(b"bc\xff\xff\xff\xff")


def test_read_block_entirely_past_end_of_file():
    fh = io.BytesIO(b"abc")
    assert read_block(fh, 4, 10, 3) == bytearray(b"\xff" * 4)


def test_load_fills_source_and_working(pattern_file):
    path = pattern_file(4096)
    window = ByteWindow(size=16, offset=100)

    file_len = window.load(path)

    assert file_len == 4096
    assert window.source == bytearray(i % 251 for i in range(100, 116))
    assert window.working == window.source
    assert window.working is not window.source
    assert (window.prev_offset, window.prev_size) == (100, 16)
    assert not window.needs_reload()


def test_load_near_end_pads_with_ff(pattern_file):
    path = pattern_file(4096)
    window = ByteWindow(size=64, offset=4080)

    window.load(path)

    assert len(window.working) == 64
    assert len(window.source) == 64
    assert window.working[:16] == bytearray(i % 251 for i in range(4080, 4096))
    assert window.working[16:] == bytearray(b"\xff" * 48)


def test_needs_reload_tracks_offset_and_size(pattern_file):
    window = ByteWindow(size=16)
    assert window.needs_reload()

    window.load(pattern_file())
    window.move_to(32)
    assert window.needs_reload()

    window.move_to(0)
    assert not window.needs_reload()

    window.resize(8)
    assert window.needs_reload()


def test_invalidate_forces_reload(pattern_file):
    window = ByteWindow(size=16)
    window.load(pattern_file())

    window.invalidate()

    assert window.needs_reload()


def test_failed_load_leaves_window_unchanged(pattern_file, tmp_path):
    window = ByteWindow(size=8)
    window.load(pattern_file())
    before = bytearray(window.working)

    window.move_to(64)
    with pytest.raises(IOError):
        window.load(str(tmp_path / "missing.bin"))

    assert window.working == before
    assert window.prev_offset == 0


def test_invalid_geometry_is_rejected():
    window = ByteWindow()

    with pytest.raises(ValueError):
        window.resize(0)
    with pytest.raises(ValueError):
        window.move_to(-1)
