"""Command interpreter for the interactive editing prompt.

One input line is one command.  Every handler reports its own
``BytEditError`` (and any ``OSError`` from the file) and returns to the
prompt; nothing escapes the loop.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.text import Text

from bytedit.cli.formatting import (
    format_apply,
    format_byte_prompt,
    format_commit,
    format_commit_error,
    format_dump,
    format_error,
    format_help,
    format_patch_errors,
    format_status,
)
from bytedit.engine.interactive import SessionState
from bytedit.engine.numbers import parse_number, parse_offset
from bytedit.exceptions import BytEditError, CommitError, OffsetError, ReadOnlyError

if TYPE_CHECKING:
    from rich.console import Console

    from bytedit.editor import Editor
    from bytedit.engine.interactive import ByteView, StepResult

logger = logging.getLogger(__name__)

PROMPT = "> "

_COLON_EDIT = re.compile(r"\s*(?P<offset>[0-9][0-9a-fA-FxX]*)\s*:(?P<patch>.*)")
_BARE_COUNT = re.compile(r"[0-9]+|0[xX][0-9a-fA-F]+")


class CommandInterpreter:
    """Dispatches prompt lines to an :class:`~bytedit.editor.Editor`.

    Args:
        editor: The editing session.
        console: Rich console for all output.
        read_line: Reads one line for a prompt; raises EOFError at end of
            input.  Defaults to ``console.input``.
    """

    def __init__(
        self,
        editor: Editor,
        console: Console,
        read_line: Callable[[str | Text], str] | None = None,
    ) -> None:
        self.editor = editor
        self.console = console
        self._read_line = read_line or console.input
        self._quit_requested = False
        self._handlers: dict[str, Callable[[str], bool]] = {
            "p": self._cmd_position,
            "r": self._cmd_record,
            "$": self._cmd_last,
            ".": self._cmd_redraw,
            "-": self._cmd_backward,
            "+": self._cmd_forward,
            "=": self._cmd_forward,
            "l": self._cmd_record_length,
            "e": self._cmd_edit,
            "w": self._cmd_write,
            "?": self._cmd_status,
            "h": self._cmd_help,
            "q": self._cmd_quit,
            "x": self._cmd_quit,
        }

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Read and execute commands until the user quits.

        End of input and Ctrl-C count as a quit command, so pending edits
        still need a second one.
        """
        self.show(self.editor.position)
        while True:
            try:
                line = self._read_line(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                line = "q"
            if not self.execute(line):
                return

    def execute(self, line: str) -> bool:
        """Run one command line.  Returns False when the session should end."""
        text = line.strip()
        command = text[:1]
        if command not in ("q", "x"):
            self._quit_requested = False

        try:
            if text == "":
                return self._advance(1)
            handler = self._handlers.get(command)
            if handler is not None:
                return handler(text[1:])
            if command.isdigit():
                return self._cmd_digits(text)
            format_error(f"Unknown command: {text!r} (h for help)", self.console)
        except CommitError as exc:
            format_commit_error(exc, self.console)
        except BytEditError as exc:
            format_error(str(exc), self.console)
        except OSError as exc:
            logger.warning("I/O error during %r: %s", text, exc)
            format_error(f"I/O error: {exc}", self.console)
        return True

    def show(self, offset: int, records: int = 1) -> None:
        format_dump(self.editor.dump(offset, records), self.console)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _advance(self, records: int) -> bool:
        start = self.editor.forward(records)
        self.show(start, max(records, 1))
        return True

    def _cmd_digits(self, text: str) -> bool:
        match = _COLON_EDIT.fullmatch(text)
        if match is not None:
            return self._edit(match.group("offset"), match.group("patch"))
        if _BARE_COUNT.fullmatch(text):
            return self._advance(parse_number(1, text))
        format_error(f"Unknown command: {text!r} (h for help)", self.console)
        return True

    def _cmd_position(self, arg: str) -> bool:
        self.show(self.editor.seek(parse_number(self.editor.position, arg)))
        return True

    def _cmd_record(self, arg: str) -> bool:
        self.show(self.editor.goto_record(parse_number(self.editor.record, arg)))
        return True

    def _cmd_last(self, arg: str) -> bool:
        self.show(self.editor.last_record())
        return True

    def _cmd_redraw(self, arg: str) -> bool:
        self.show(self.editor.position)
        return True

    def _cmd_backward(self, arg: str) -> bool:
        self.show(self.editor.backward(parse_number(1, arg)))
        return True

    def _cmd_forward(self, arg: str) -> bool:
        self.show(self.editor.forward(parse_number(1, arg)))
        return True

    def _cmd_record_length(self, arg: str) -> bool:
        value = self.editor.set_record_length(parse_number(0, arg))
        self.console.print(f"Record length: {value}")
        return True

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _cmd_edit(self, arg: str) -> bool:
        parts = arg.strip().split(None, 1)
        if not parts:
            raise OffsetError("Usage: e OFFSET [PATCH...]")
        return self._edit(parts[0], parts[1] if len(parts) > 1 else "")

    def _edit(self, offset_text: str, patch_text: str) -> bool:
        if self.editor.read_only:
            raise ReadOnlyError()
        offset = parse_offset(offset_text)
        if not patch_text.strip():
            self._interactive(offset)
            return True

        parsed, applied = self.editor.edit(offset, patch_text)
        format_patch_errors(parsed, self.console)
        format_apply(applied, self.console)
        records = max(1, -(-len(parsed.data) // self.editor.record_length))
        self.show(offset, records)
        return True

    def _interactive(self, offset: int) -> None:
        session = self.editor.edit_session(offset)

        def read(view: ByteView) -> str | None:
            try:
                return self._read_line(format_byte_prompt(view))
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return None

        def report(step: StepResult) -> None:
            if step.patch is not None:
                format_patch_errors(step.patch, self.console)
            if step.applied is not None and step.applied.truncated:
                format_apply(step.applied, self.console)

        state = session.run(read, report)
        if state is SessionState.END_OF_FILE:
            self.console.print("[dim]End of file.[/dim]")
        logger.debug("Edit session ended at %#x (%s)", session.offset, state.value)

    def _cmd_write(self, arg: str) -> bool:
        format_commit(self.editor.write(), self.console)
        return True

    # ------------------------------------------------------------------
    # Other
    # ------------------------------------------------------------------

    def _cmd_status(self, arg: str) -> bool:
        format_status(self.editor.status(), self.console)
        return True

    def _cmd_help(self, arg: str) -> bool:
        format_help(self.console)
        return True

    def _cmd_quit(self, arg: str) -> bool:
        if self.editor.dirty and not self._quit_requested:
            self._quit_requested = True
            self.console.print(
                f"[yellow]{len(self.editor.overlay)} unwritten edit(s).[/yellow] "
                "Use w to write them, or quit again to discard."
            )
            return True
        self.editor.discard()
        return False
