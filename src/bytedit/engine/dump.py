"""Hex+ASCII dump of a record window, merged with the pending overlay.

:func:`render_dump` returns a structured :class:`DumpView`; turning it
into terminal output is the formatter's job.  Bytes outside the
requested window are masked even when they share a line with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from bytedit.engine.translate import glyph

if TYPE_CHECKING:
    from bytedit.engine.overlay import PendingEditOverlay
    from bytedit.engine.position import PositionModel
    from bytedit.protocols import ByteStore

CellKind = Literal["byte", "masked", "blank"]

GROUP_SIZE = 8


@dataclass(frozen=True)
class DumpCell:
    """One column of a dump row.

    ``blank`` cells lie past end of file, ``masked`` cells lie outside
    the requested window, ``byte`` cells carry a value (the staged one
    when ``staged`` is set).
    """

    kind: CellKind
    value: int | None = None
    staged: bool = False

    @property
    def hex(self) -> str:
        if self.kind == "byte":
            return f"{self.value:02x}"
        if self.kind == "masked":
            return ".."
        return "  "

    @property
    def glyph(self) -> str:
        if self.kind == "byte" and self.value is not None:
            return glyph(self.value)
        return " "


@dataclass(frozen=True)
class DumpRow:
    offset: int
    cells: list[DumpCell] = field(default_factory=list)


@dataclass(frozen=True)
class DumpView:
    """A rendered dump window.

    Attributes:
        start: Clamped start offset of the window.
        end: One past the last offset shown (``min(start + n*lrl, eof)``).
        eof: File length at render time.
        bytes_per_line: Cells per row.
        rows: Dump rows in offset order.
        at_eof: True when the last row reaches end of file.
    """

    start: int
    end: int
    eof: int
    bytes_per_line: int
    rows: list[DumpRow] = field(default_factory=list)
    at_eof: bool = False

    def cell(self, offset: int) -> DumpCell | None:
        """Look up the cell for an absolute offset, if it is on screen."""
        for row in self.rows:
            if row.offset <= offset < row.offset + self.bytes_per_line:
                return row.cells[offset - row.offset]
        return None

    def __str__(self) -> str:
        return "\n".join(format_plain_lines(self))


def render_dump(
    store: ByteStore,
    overlay: PendingEditOverlay,
    position: PositionModel,
    offset: int,
    records: int = 1,
    *,
    bytes_per_line: int = 16,
) -> DumpView:
    """Render *records* logical records starting at *offset*."""
    eof = store.size()
    start = position.clamp(offset, eof)
    dump_high = min(start + max(records, 0) * position.record_length, eof)
    low = start - start % bytes_per_line
    high = -(-dump_high // bytes_per_line) * bytes_per_line

    window = store.read(start, dump_high - start)
    rows: list[DumpRow] = []
    for line in range(low, high, bytes_per_line):
        cells: list[DumpCell] = []
        for j in range(line, line + bytes_per_line):
            if j >= eof:
                cells.append(DumpCell("blank"))
            elif j >= dump_high or j < start:
                cells.append(DumpCell("masked"))
            else:
                staged = overlay.get(j)
                if staged is not None:
                    cells.append(DumpCell("byte", staged, staged=True))
                else:
                    cells.append(DumpCell("byte", window[j - start]))
        rows.append(DumpRow(offset=line, cells=cells))

    return DumpView(
        start=start,
        end=dump_high,
        eof=eof,
        bytes_per_line=bytes_per_line,
        rows=rows,
        at_eof=high >= eof,
    )


def offset_label(offset: int) -> str:
    """Row label: decimal and hex offset."""
    return f"{offset:10d} {offset:08x}"


def ruler(bytes_per_line: int) -> str:
    """Column header aligned with :func:`hex_columns`."""
    return hex_columns([f"{j:2x}" for j in range(bytes_per_line)])


def column_separator(j: int) -> str:
    """Spacing before hex column *j*: one space, two at each group boundary."""
    if j == 0:
        return ""
    return "  " if j % GROUP_SIZE == 0 else " "


def hex_columns(parts: list[str]) -> str:
    """Join two-character hex cells, with a wider gap every GROUP_SIZE cells."""
    return "".join(column_separator(j) + part for j, part in enumerate(parts))


def eof_label(eof: int) -> str:
    return f"<EOF> {eof} (0x{eof:x}) bytes"


def format_plain_lines(view: DumpView) -> list[str]:
    """Plain-text rendering; staged bytes are marked with ``*`` after the row."""
    blank_label = " " * len(offset_label(0))
    lines = [f"{blank_label}  {ruler(view.bytes_per_line)}"]
    for row in view.rows:
        hex_part = hex_columns([c.hex for c in row.cells])
        text_part = "".join(c.glyph for c in row.cells)
        marker = " *" if any(c.staged for c in row.cells) else ""
        lines.append(f"{offset_label(row.offset)}  {hex_part}  |{text_part}|{marker}")
    if view.at_eof:
        lines.append(eof_label(view.eof))
    return lines
