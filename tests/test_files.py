from pathlib import Path

import pytest

from binedit.core.files import FileRecord, FileTable
from binedit.core.undo import UndoEntry


def _record(path: str, size: int = 2048, offset: int = 0) -> FileRecord:
    record = FileRecord(path)
    record.load_window(size, offset)
    return record


def test_load_window_caches_file_length(pattern_file):
    record = _record(pattern_file(4096), 16, 32)

    assert record.size == 4096
    assert record.window.working == bytearray(i % 251 for i in range(32, 48))


def test_commit_records_before_and_after(pattern_file):
    record = _record(pattern_file(4096), 16, 96)

    assert record.commit(4, b"\x41\x42")

    assert record.window.working[4:6] == bytearray(b"\x41\x42")
    assert record.window.source[4:6] == bytearray([100, 101])
    assert record.overlay.get(100) == b"\x41\x42"
    assert len(record.undo_log) == 2


def test_commit_outside_window_is_refused(pattern_file):
    record = _record(pattern_file(4096), 16, 0)

    assert not record.commit(15, b"\x00\x00")
    assert not record.overlay
    assert len(record.undo_log) == 0


def test_edits_survive_moving_the_window(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    record.commit(2, b"\xee")

    record.load_window(16, 512)
    record.load_window(16, 0)

    assert record.window.working[2] == 0xee
    assert record.window.source[2] == 2


def test_flush_round_trip(pattern_file):
    path = pattern_file(4096)
    record = _record(path, 2048, 0)
    record.commit(100, b"\x41")
    record.commit(101, b"\x42")
    record.load_window(16, 3000)
    record.commit(0, b"\x99\x98")

    record.flush()

    assert not record.overlay
    assert record.window.needs_reload()

    fresh = _record(path, 2, 100)
    assert fresh.window.working == bytearray(b"\x41\x42")
    fresh.load_window(2, 3000)
    assert fresh.window.working == bytearray(b"\x99\x98")


def test_undo_then_redo_restores_post_edit_state(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    record.commit(3, b"\x77")
    after_edit = bytearray(record.window.working)

    record.undo()
    assert record.window.working[3] == 3
    assert record.overlay.get(3) == b"\x03"

    record.redo()
    assert record.window.working == after_edit
    assert record.overlay.get(3) == b"\x77"


def test_redo_then_undo_after_undo_is_neutral(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    record.commit(3, b"\x77")
    record.undo()
    after_undo = bytearray(record.window.working)

    record.redo()
    record.undo()

    assert record.window.working == after_undo


def test_undo_on_empty_log_changes_nothing(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    before = bytearray(record.window.working)

    record.undo()
    record.redo()

    assert record.window.working == before
    assert not record.overlay


def test_undo_walks_back_several_edits(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    record.commit(0, b"\x10")
    record.commit(0, b"\x20")

    record.undo()
    assert record.window.working[0] == 0x10

    record.undo()
    assert record.window.working[0] == 0x00

    record.undo()
    assert record.window.working[0] == 0x00


def test_new_edit_keeps_redo_log(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    record.commit(0, b"\x10")
    record.undo()
    record.commit(1, b"\x20")

    record.redo()

    assert record.window.working[0] == 0x10
    assert record.window.working[1] == 0x20


def test_commit_after_move_snapshots_new_offset(pattern_file):
    record = _record(pattern_file(4096), 16, 0)
    record.window.move_to(1000)

    assert record.commit(0, b"\xaa")
    assert record.window.offset == 1000
    assert record.undo_log.pop() == UndoEntry(1000, b"\xaa")
    assert record.undo_log.pop() == UndoEntry(1000, bytes([1000 % 251]))
    assert record.window.working[1:3] == bytearray([1001 % 251, 1002 % 251])


def test_undo_after_move_restores_bytes_on_disk(pattern_file):
    path = pattern_file(4096)
    record = _record(path, 16, 0)
    record.window.move_to(1000)
    record.commit(0, b"\xaa")
    record.window.resize(32)

    record.undo()
    record.flush()

    assert Path(path).read_bytes() == bytes(i % 251 for i in range(4096))
    assert record.window.offset == 1000


def test_failed_load_window_keeps_geometry(tmp_path, pattern_file):
    path = pattern_file(4096)
    record = _record(path, 16, 0)
    Path(path).unlink()

    with pytest.raises(IOError):
        record.load_window(32, 64)

    assert (record.window.size, record.window.offset) == (16, 0)


def test_search_appends_group_and_navigation_moves_window(make_file):
    data = bytearray(8192)
    data[100:102] = b"AB"
    data[5000:5002] = b"AB"
    record = _record(make_file(bytes(data)), 16, 0)

    assert record.search("AB") == 2
    assert record.search("AB") == 2
    assert len(record.hits) == 2

    record.select_next_hit()
    assert record.window.offset == 5000
    record.select_prev_hit()
    assert record.window.offset == 100

    record.select_next_group()
    assert record.hits.selected == 1
    assert record.window.offset == 100

    record.sync()
    assert record.window.working[:2] == bytearray(b"AB")


def test_hit_navigation_without_groups_is_noop(pattern_file):
    record = _record(pattern_file(4096), 16, 32)

    record.select_next_hit()
    record.select_prev_group()

    assert record.window.offset == 32


def test_search_reads_disk_not_patches(make_file):
    record = _record(make_file(b"\x00" * 64), 64, 0)
    record.commit(10, b"Z")

    assert record.search("Z") == 0


def test_file_table_handles_are_stable():
    table = FileTable()
    first = table.open("a.bin")
    second = table.open("b.bin")

    table.close(first)
    third = table.open("c.bin")

    assert third not in (first, second)
    assert table.get(second).path == "b.bin"
    assert first not in table
    with pytest.raises(KeyError):
        table.get(first)


def test_file_table_cycles_handles():
    table = FileTable()
    handles = [table.open(name) for name in ("a", "b", "c")]

    assert table.next_handle(handles[2]) == handles[0]
    assert table.prev_handle(handles[0]) == handles[2]
    assert len(table) == 3
