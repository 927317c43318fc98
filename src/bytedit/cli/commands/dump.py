"""bytedit dump -- print a hex+ASCII window and exit."""

from __future__ import annotations

import click

from bytedit.cli.formatting import format_dump


@click.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("-o", "--offset", default="0", help="Start offset (decimal or 0x hex).")
@click.option("-r", "--record", "record", default=None, type=click.IntRange(min=0), help="Start at this record instead of --offset.")
@click.option("-n", "--records", default=1, type=click.IntRange(min=1), show_default=True, help="Number of records to show.")
@click.pass_context
def dump(ctx: click.Context, path: str, offset: str, record: int | None, records: int) -> None:
    """Show RECORDS records of PATH starting at OFFSET."""
    from bytedit.cli import _editor_session
    from bytedit.engine.numbers import parse_offset

    with _editor_session(ctx, path, read_only=True) as (ed, console):
        if record is not None:
            start = ed.goto_record(record)
        else:
            start = ed.seek(parse_offset(offset))
        format_dump(ed.dump(start, records), console)
