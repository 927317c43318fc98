"""Tests for the interactive command interpreter.

Drives CommandInterpreter with scripted input lines and captures the
rich console output in memory.
"""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from bytedit.cli.repl import CommandInterpreter
from bytedit.editor import Editor
from bytedit.storage.files import MemoryByteStore
from tests.conftest import SAMPLE, FailingStore, make_editor


class Script:
    """Scripted line reader; raises EOFError once lines run out."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(str(prompt))
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def _interp(editor=None, lines=(), **kwargs):
    editor = editor or make_editor(**kwargs)
    out = StringIO()
    console = Console(file=out, width=200, color_system=None)
    script = Script(lines)
    return CommandInterpreter(editor, console, read_line=script), out, script


class TestNavigationCommands:
    def test_position(self):
        interp, out, _ = _interp(record_length=16)
        assert interp.execute("p0x12")
        assert interp.editor.position == 0x12
        assert "00000010" in out.getvalue()

    def test_position_clamps(self):
        interp, _, _ = _interp(record_length=16)
        interp.execute("p999")
        assert interp.editor.position == 32

    def test_record(self):
        interp, _, _ = _interp(record_length=8)
        interp.execute("r3")
        assert interp.editor.position == 24
        interp.execute("p27")
        interp.execute("r")
        assert interp.editor.position == 24

    def test_last_record(self):
        interp, out, _ = _interp(editor=make_editor(bytes(10), record_length=4))
        interp.execute("$")
        assert interp.editor.position == 8
        assert "<EOF> 10" in out.getvalue()

    def test_bare_digits_advance(self):
        interp, _, _ = _interp(record_length=4)
        interp.execute("3")
        assert interp.editor.position == 12

    def test_empty_line_advances_one(self):
        interp, _, _ = _interp(record_length=4)
        interp.execute("")
        interp.execute("   ")
        assert interp.editor.position == 8

    def test_plus_minus_equals(self):
        interp, _, _ = _interp(record_length=4)
        interp.execute("+5")
        assert interp.editor.position == 20
        interp.execute("-2")
        assert interp.editor.position == 12
        interp.execute("=")
        assert interp.editor.position == 16
        interp.execute("-")
        assert interp.editor.position == 12
        interp.execute("-99")
        assert interp.editor.position == 0

    def test_redraw(self):
        interp, out, _ = _interp(record_length=4)
        interp.execute("p8")
        interp.execute(".")
        assert interp.editor.position == 8
        assert out.getvalue().count("|        89:;    |") == 2

    def test_record_length(self):
        interp, out, _ = _interp(record_length=4)
        interp.execute("l32")
        assert interp.editor.record_length == 32
        assert "Record length: 32" in out.getvalue()

    @pytest.mark.parametrize("cmd", ["l0", "l", "l99999"])
    def test_record_length_rejected(self, cmd):
        interp, out, _ = _interp(record_length=4)
        assert interp.execute(cmd)
        assert interp.editor.record_length == 4
        assert "Error" in out.getvalue()

    def test_unknown_command(self):
        interp, out, _ = _interp()
        assert interp.execute("zap")
        assert interp.execute("12abc")
        assert out.getvalue().count("Unknown command") == 2
        assert interp.editor.position == 0


class TestEditCommands:
    def test_hex_patch(self):
        interp, out, _ = _interp(record_length=16)
        interp.execute("e 2 414243")
        assert interp.editor.overlay.as_dict() == {2: 0x41, 3: 0x42, 4: 0x43}
        assert "Staged 3 byte(s) at 0x2" in out.getvalue()

    def test_string_patch(self):
        interp, _, _ = _interp()
        interp.execute('e 0x10 "hi there"')
        assert bytes(interp.editor.overlay.get(o) for o in range(16, 24)) == b"hi there"

    def test_colon_form(self):
        interp, _, _ = _interp()
        interp.execute("5: ff 'z'")
        assert interp.editor.overlay.as_dict() == {5: 0xFF, 6: ord("z")}

    def test_bad_token_reported_rest_applied(self):
        interp, out, _ = _interp()
        interp.execute("e 0 ff qq ee")
        assert interp.editor.overlay.as_dict() == {0: 0xFF, 1: 0xEE}
        assert "'qq'" in out.getvalue()

    def test_bad_offset(self):
        interp, out, _ = _interp()
        interp.execute("e zz 00")
        interp.execute("e 40 00")
        interp.execute("e")
        assert not interp.editor.dirty
        assert out.getvalue().count("Error") == 3

    def test_interactive_session(self):
        interp, out, script = _interp(lines=["", "7a", "", "-", "00"])
        interp.execute("e 0")
        # EOFError after the scripted lines ends the session
        assert interp.editor.overlay.as_dict() == {1: 0x00}
        assert interp.execute(".")

    def test_interactive_session_to_eof(self):
        interp, out, _ = _interp(lines=["", "", "ff"])
        interp.execute("e 37")
        assert interp.editor.overlay.as_dict() == {39: 0xFF}
        assert "End of file" not in out.getvalue()
        interp2, out2, _ = _interp(lines=["", "", ""])
        interp2.execute("e 37")
        assert "End of file" in out2.getvalue()

    def test_interactive_prompt_shows_staged(self):
        interp, _, script = _interp(lines=["41", None])
        interp.execute("e 0")
        assert "30 '0'" in script.prompts[0]
        assert "-> 41 'A'" in script.prompts[1]

    def test_write(self, sample_file):
        with Editor.open(sample_file) as ed:
            interp, out, _ = _interp(editor=ed)
            interp.execute("e 0 '!'")
            interp.execute("w")
            assert not ed.dirty
            assert "Wrote 1 byte(s)" in out.getvalue()
        with open(sample_file, "rb") as fh:
            assert fh.read(1) == b"!"

    def test_write_nothing(self):
        interp, out, _ = _interp()
        interp.execute("w")
        assert "No pending edits" in out.getvalue()

    def test_write_failure_reports_pending(self):
        ed = Editor.from_store(FailingStore(SAMPLE, fail_at={1}))
        interp, out, _ = _interp(editor=ed)
        interp.execute("e 0 000000")
        assert interp.execute("w")
        text = out.getvalue()
        assert "Written: 0x0" in text
        assert "Pending: 0x1, 0x2" in text
        assert ed.overlay.offsets() == [1, 2]


class TestReadOnly:
    @pytest.mark.parametrize("cmd", ["e 0 00", "e 0", "0: 00", "w"])
    def test_rejected(self, sample_file, cmd):
        with Editor.open(sample_file, read_only=True) as ed:
            interp, out, _ = _interp(editor=ed)
            assert interp.execute(cmd)
            assert "read-only" in out.getvalue()
            assert not ed.dirty


class TestStatusAndHelp:
    def test_status(self):
        interp, out, _ = _interp(record_length=16)
        interp.execute("e 3 ff")
        interp.execute("?")
        text = out.getvalue()
        assert "test.bin" in text
        assert "40 (0x28) bytes" in text
        assert "Max record:  2" in text
        assert "Pending edits (1)" in text
        assert "00000003" in text

    def test_help(self):
        interp, out, _ = _interp()
        interp.execute("h")
        assert "quit" in out.getvalue()


class TestQuit:
    @pytest.mark.parametrize("cmd", ["q", "x"])
    def test_quit_clean(self, cmd):
        interp, _, _ = _interp()
        assert interp.execute(cmd) is False

    def test_quit_with_pending_needs_confirmation(self):
        interp, out, _ = _interp()
        interp.execute("e 0 ff")
        assert interp.execute("q") is True
        assert "1 unwritten edit(s)" in out.getvalue()
        assert interp.editor.dirty
        assert interp.execute("q") is False
        assert not interp.editor.dirty

    def test_other_command_resets_confirmation(self):
        interp, _, _ = _interp()
        interp.execute("e 0 ff")
        interp.execute("q")
        interp.execute(".")
        assert interp.execute("x") is True

    def test_run_until_eof(self):
        interp, out, script = _interp(lines=["e 0 ff", "?"])
        interp.run()
        # end of input counts as quit, twice because of the pending edit
        assert "unwritten" in out.getvalue()
        assert not interp.editor.dirty
        assert len(script.prompts) == 4


class UnreadableStore(MemoryByteStore):
    """Memory store whose reads fail once ``broken`` is set."""

    broken = False

    def read(self, offset: int, length: int) -> bytes:
        if self.broken:
            raise OSError(5, "Input/output error")
        return super().read(offset, length)


class TestIOErrors:
    def test_read_error_is_reported_and_loop_continues(self):
        store = UnreadableStore(SAMPLE, name="test.bin")
        interp, out, _ = _interp(editor=Editor.from_store(store))
        interp.execute("e 0 ff")
        store.broken = True
        assert interp.execute(".") is True
        assert "Error" in out.getvalue()
        assert "Input/output error" in out.getvalue()
        assert interp.editor.dirty

    def test_read_error_during_interactive_edit(self):
        store = UnreadableStore(SAMPLE, name="test.bin")
        interp, out, _ = _interp(editor=Editor.from_store(store), lines=["41"])
        store.broken = True
        assert interp.execute("e 0") is True
        assert "Input/output error" in out.getvalue()
