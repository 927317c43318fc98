"""Tests for the Editor session object.

Covers navigation, staging, status, commit round-trips and read-only
mode through the public facade.
"""

from __future__ import annotations

import logging

import pytest

from bytedit import (
    CommitError,
    Editor,
    EditorConfig,
    FileAccessError,
    OffsetError,
    ReadOnlyError,
    RecordLengthError,
)
from bytedit.storage.files import MemoryByteStore
from tests.conftest import SAMPLE, FailingStore, make_editor


class TestOpen:
    def test_open_file(self, sample_file):
        with Editor.open(sample_file, record_length=16) as ed:
            assert ed.eof == 40
            assert ed.record_length == 16
            assert ed.position == 0
            assert not ed.dirty

    def test_open_missing(self, tmp_path):
        with pytest.raises(FileAccessError):
            Editor.open(str(tmp_path / "missing.bin"))

    def test_config_and_overrides(self, sample_file):
        config = EditorConfig(record_length=8, bytes_per_line=32)
        with Editor.open(sample_file, config=config, read_only=True) as ed:
            assert ed.record_length == 8
            assert ed.config.bytes_per_line == 32
            assert ed.read_only

    def test_read_only_store_forces_read_only(self):
        ed = Editor.from_store(MemoryByteStore(b"abc", read_only=True))
        assert ed.read_only


class TestNavigation:
    def test_ten_byte_file_last_record(self):
        ed = make_editor(bytes(10), record_length=4)
        assert ed.last_record() == 8
        view = ed.dump()
        assert view.cell(8).kind == "byte"
        assert view.cell(9).kind == "byte"
        assert view.cell(10).kind == "blank"
        assert view.cell(11).kind == "blank"

    def test_forward_backward_record(self):
        ed = make_editor(record_length=8)
        assert ed.forward() == 8
        assert ed.forward(2) == 24
        assert ed.record == 3
        assert ed.backward(5) == 0
        assert ed.goto_record(4) == 32
        assert ed.goto_record() == 32

    def test_seek_clamps(self):
        ed = make_editor(record_length=16)
        assert ed.seek(-3) == 0
        assert ed.seek(1000) == 32
        assert ed.seek(0x11) == 0x11

    def test_set_record_length_rejects(self):
        ed = make_editor(record_length=8)
        with pytest.raises(RecordLengthError):
            ed.set_record_length(0)
        assert ed.record_length == 8


class TestEditing:
    def test_edit_hex_and_string(self):
        ed = make_editor(record_length=16)
        parsed, applied = ed.edit(0, '"AB" 4344')
        assert parsed.ok
        assert ed.overlay.as_dict() == {0: 0x41, 1: 0x42, 2: 0x43, 3: 0x44}
        assert applied.end == 4
        assert ed.dirty

    def test_edit_keeps_good_tokens(self):
        ed = make_editor()
        parsed, _ = ed.edit(0, ["7a", "nope", "7b"])
        assert [e.token for e in parsed.errors] == ["nope"]
        assert ed.overlay.as_dict() == {0: 0x7A, 1: 0x7B}

    @pytest.mark.parametrize("offset", [-1, 40, 1000])
    def test_edit_offset_out_of_range(self, offset):
        ed = make_editor()
        with pytest.raises(OffsetError):
            ed.edit(offset, "00")
        assert not ed.dirty

    def test_edit_back_to_original_cleans(self):
        ed = make_editor()
        ed.edit(5, "ff")
        ed.edit(5, SAMPLE[5:6].hex())
        assert not ed.dirty

    def test_edit_session(self):
        ed = make_editor()
        session = ed.edit_session(38)
        session.feed("00")
        session.feed("")
        session.feed("")
        assert not session.active
        assert ed.overlay.as_dict() == {38: 0}

    def test_edit_session_offset_checked(self):
        with pytest.raises(OffsetError):
            make_editor().edit_session(40)

    def test_discard(self, caplog):
        ed = make_editor()
        ed.edit(0, "ffff")
        with caplog.at_level(logging.INFO, logger="bytedit.editor"):
            assert ed.discard() == 2
        assert not ed.dirty
        assert "Discarded 2" in caplog.text


class TestWrite:
    def test_commit_round_trip(self, sample_file):
        with Editor.open(sample_file) as ed:
            ed.edit(2, '"hey"')
            ed.edit(39, "21")
            result = ed.write()
            assert result.written == [2, 3, 4, 39]
            assert not ed.dirty
        with open(sample_file, "rb") as fh:
            data = fh.read()
        assert data[2:5] == b"hey"
        assert data[39:] == b"!"
        assert data[:2] == SAMPLE[:2]
        assert len(data) == len(SAMPLE)

    def test_commit_failure_leaves_pending(self):
        ed = Editor.from_store(FailingStore(SAMPLE, fail_at={10}))
        ed.edit(9, "000000")
        with pytest.raises(CommitError):
            ed.write()
        assert ed.overlay.offsets() == [10, 11]

    def test_write_attempts_from_config(self):
        store = FailingStore(SAMPLE, fail_at={0}, fail_times=1)
        ed = Editor.from_store(store, write_attempts=2)
        ed._committer.retry_wait = 0
        ed.edit(0, "00")
        assert ed.write().written == [0]


class TestReadOnly:
    def test_edit_refused(self, sample_file):
        with Editor.open(sample_file, read_only=True) as ed:
            with pytest.raises(ReadOnlyError):
                ed.edit(0, "00")
            with pytest.raises(ReadOnlyError):
                ed.edit_session(0)
            with pytest.raises(ReadOnlyError):
                ed.write()
            assert not ed.dirty

    def test_navigation_allowed(self, sample_file):
        with Editor.open(sample_file, read_only=True, record_length=16) as ed:
            assert ed.forward() == 16
            assert ed.dump().start == 16


class TestStatus:
    def test_status(self):
        ed = make_editor(record_length=16)
        ed.edit(3, "ff")
        ed.forward()
        info = ed.status()
        assert info.name == "test.bin"
        assert info.size == 40
        assert info.position == 16
        assert info.record_length == 16
        assert info.max_record == 2
        assert info.dirty
        assert len(info.pending) == 1
        pending = info.pending[0]
        assert (pending.offset, pending.disk, pending.staged) == (3, SAMPLE[3], 0xFF)
        assert "1 pending" in str(info)

    def test_close_with_pending_warns(self, caplog):
        ed = make_editor()
        ed.edit(0, "ff")
        with caplog.at_level(logging.WARNING, logger="bytedit.editor"):
            ed.close()
        assert "unwritten" in caplog.text
