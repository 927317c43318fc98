"""Byte-at-a-time interactive edit session.

The session is a small state machine over ``offset``.  The caller asks
for :meth:`InteractiveEditSession.current` to draw a prompt, then feeds
one input line (or ``None`` for end of input) to
:meth:`InteractiveEditSession.feed`:

- ``None``: session ends.
- ``""``: keep the shown value, move to the next byte.
- ``"-"``: move back one byte.
- anything else: parse as a patch and stage it at ``offset``.  The
  offset does not advance, so the next prompt shows the result.

The session also ends once ``offset`` reaches end of file.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bytedit.engine.applier import ApplyResult, apply_patch
from bytedit.engine.patch import PatchResult, parse_patch
from bytedit.engine.position import PositionModel

if TYPE_CHECKING:
    from bytedit.engine.overlay import PendingEditOverlay
    from bytedit.protocols import ByteStore


class SessionState(str, enum.Enum):
    ACTIVE = "active"
    END_OF_FILE = "end_of_file"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True)
class ByteView:
    """What the prompt shows for the current byte."""

    offset: int
    disk: int
    staged: int | None

    @property
    def modified(self) -> bool:
        return self.staged is not None and self.staged != self.disk

    @property
    def value(self) -> int:
        return self.disk if self.staged is None else self.staged


@dataclass(frozen=True)
class StepResult:
    """Result of one :meth:`InteractiveEditSession.feed` call."""

    patch: PatchResult | None = None
    applied: ApplyResult | None = None


class InteractiveEditSession:
    def __init__(
        self,
        store: ByteStore,
        overlay: PendingEditOverlay,
        offset: int,
    ) -> None:
        self._store = store
        self._overlay = overlay
        self.offset = offset
        self.state = SessionState.ACTIVE
        self._check_eof()

    @property
    def active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def _check_eof(self) -> None:
        if self.state is SessionState.ACTIVE and self.offset >= self._store.size():
            self.state = SessionState.END_OF_FILE

    def current(self) -> ByteView:
        """Describe the byte at the current offset."""
        if not self.active:
            raise RuntimeError(f"Edit session is finished ({self.state.value})")
        disk = self._store.read(self.offset, 1)[0]
        return ByteView(offset=self.offset, disk=disk, staged=self._overlay.get(self.offset))

    def feed(self, line: str | None) -> StepResult:
        """Advance the state machine by one input line."""
        if not self.active:
            raise RuntimeError(f"Edit session is finished ({self.state.value})")

        if line is None:
            self.state = SessionState.END_OF_INPUT
            return StepResult()

        text = line.rstrip("\r\n")
        if text == "":
            self.offset += 1
            self._check_eof()
            return StepResult()
        if text == "-":
            self.offset = PositionModel.clamp_to_eof(self.offset - 1, self._store.size())
            return StepResult()

        patch = parse_patch(text)
        applied = apply_patch(self._overlay, self.offset, patch.data, self._store)
        return StepResult(patch=patch, applied=applied)

    def run(
        self,
        read_line: Callable[[ByteView], str | None],
        on_step: Callable[[StepResult], None] | None = None,
    ) -> SessionState:
        """Drive the session until it finishes.

        Args:
            read_line: Shows the prompt for a byte and returns the user's
                line, or None at end of input.
            on_step: Optional callback for reporting patch errors.
        """
        while self.active:
            result = self.feed(read_line(self.current()))
            if on_step is not None:
                on_step(result)
        return self.state
