"""Rich formatting helpers for the bytedit CLI.

Provides functions that format engine results for terminal display.
Staged bytes are shown in reverse video.  Rich auto-detects TTY and
degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from bytedit.engine.dump import column_separator, eof_label, offset_label, ruler
from bytedit.engine.translate import glyph

if TYPE_CHECKING:
    from bytedit.engine.applier import ApplyResult
    from bytedit.engine.commit import CommitResult
    from bytedit.engine.dump import DumpView
    from bytedit.engine.interactive import ByteView
    from bytedit.engine.patch import PatchResult
    from bytedit.exceptions import CommitError
    from bytedit.status import StatusInfo

STAGED_STYLE = "reverse"

HELP_TEXT = """\
Navigation:
  p<N>        go to offset N (decimal, or hex with 0x)
  r<N>        go to record N (default: current record)
  $           go to the last record
  .           redisplay the current record
  <N>         advance N records and display them (default 1)
  <enter>     advance one record
  -<N> +<N>   move back / forward N records (default 1); =<N> is +<N>
  l<N>        set the logical record length

Editing:
  e OFFSET            edit byte by byte from OFFSET
                        <enter> keeps a byte, '-' goes back,
                        anything else is a patch; end of input stops
  e OFFSET PATCH...   stage a patch at OFFSET
  OFFSET: PATCH...    same as 'e OFFSET PATCH...'
  w                   write all pending edits to the file

  A patch is hex digits (e.g. 48656c6c6f, odd lengths get a leading 0)
  or a quoted string (e.g. "Hello").

Other:
  ?           show file status and pending edits
  h           show this help
  q, x        quit (twice if there are unwritten edits)"""


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False, highlight=False)


def format_dump(view: DumpView, console: Console) -> None:
    """Display a dump window, highlighting staged bytes."""
    label_width = len(offset_label(0))
    console.print(
        Text(" " * label_width + "  " + ruler(view.bytes_per_line), style="dim"),
        soft_wrap=True,
    )

    for row in view.rows:
        line = Text(offset_label(row.offset), style="yellow")
        line.append("  ")
        for j, cell in enumerate(row.cells):
            line.append(column_separator(j))
            if cell.staged:
                style = STAGED_STYLE
            elif cell.kind == "masked":
                style = "dim"
            else:
                style = ""
            line.append(cell.hex, style=style)
        line.append("  |")
        for cell in row.cells:
            line.append(cell.glyph, style=STAGED_STYLE if cell.staged else "")
        line.append("|")
        console.print(line, soft_wrap=True)

    if view.at_eof:
        console.print(Text(eof_label(view.eof), style="dim"))


def format_byte_prompt(view: ByteView) -> Text:
    """Prompt text for one byte of an interactive edit session."""
    text = Text(f"{view.offset:10d} {view.offset:08x}  ", style="yellow")
    text.append(f"{view.disk:02x} {glyph(view.disk)!r}")
    if view.staged is not None:
        text.append(" -> ")
        text.append(
            f"{view.staged:02x} {glyph(view.staged)!r}",
            style=STAGED_STYLE if view.modified else "",
        )
    text.append(" : ")
    return text


def format_patch_errors(result: PatchResult, console: Console) -> None:
    for err in result.errors:
        format_error(str(err), console)


def format_apply(result: ApplyResult, console: Console) -> None:
    """Summarize a staged patch."""
    parts = [f"Staged [green]{len(result.staged)}[/green] byte(s) at 0x{result.start:x}"]
    if result.cleared:
        parts.append(f"[dim]{len(result.cleared)} unchanged[/dim]")
    console.print(", ".join(parts))
    if result.truncated:
        console.print(
            f"[yellow]{result.truncated} byte(s) past end of file ignored[/yellow]"
        )


def format_commit(result: CommitResult, console: Console) -> None:
    if result.count == 0:
        console.print("[dim]No pending edits.[/dim]")
    else:
        console.print(f"Wrote [green]{result.count}[/green] byte(s).")


def format_commit_error(err: CommitError, console: Console) -> None:
    format_error(str(err), console)
    if err.written:
        console.print("  Written: " + ", ".join(f"0x{o:x}" for o in err.written))
    console.print("  Pending: " + ", ".join(f"0x{o:x}" for o in err.pending))


def format_status(info: StatusInfo, console: Console) -> None:
    """Display editor status and pending edits."""
    mode = " [red](read-only)[/red]" if info.read_only else ""
    console.print(f"File:          [green]{escape(info.name)}[/green]{mode}")
    console.print(f"  Size:        {info.size} (0x{info.size:x}) bytes")
    console.print(f"  Position:    {info.position} (0x{info.position:x})")
    console.print(f"  Record len:  {info.record_length}")
    console.print(f"  Max record:  {info.max_record}")

    if not info.pending:
        console.print("[dim]No pending edits.[/dim]")
        return

    console.print()
    console.print(f"[bold]Pending edits ({len(info.pending)}):[/bold]")
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Offset", justify="right")
    table.add_column("Hex", style="yellow")
    table.add_column("Disk", style="dim")
    table.add_column("New", style="green")
    for edit in info.pending:
        table.add_row(
            str(edit.offset),
            f"{edit.offset:08x}",
            f"{edit.disk:02x} {escape(glyph(edit.disk))}",
            f"{edit.staged:02x} {escape(glyph(edit.staged))}",
        )
    console.print(table)


def format_help(console: Console) -> None:
    console.print(escape(HELP_TEXT))


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
