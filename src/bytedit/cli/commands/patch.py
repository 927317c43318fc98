"""bytedit patch -- stage a patch expression and optionally write it."""

from __future__ import annotations

import click

from bytedit.cli.formatting import (
    format_apply,
    format_commit,
    format_commit_error,
    format_dump,
    format_patch_errors,
)
from bytedit.exceptions import CommitError


@click.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.argument("offset")
@click.argument("tokens", nargs=-1, required=True)
@click.option("--write", "do_write", is_flag=True, help="Write the patch to the file (default: preview only).")
@click.pass_context
def patch(ctx: click.Context, path: str, offset: str, tokens: tuple[str, ...], do_write: bool) -> None:
    """Patch PATH at OFFSET with hex or quoted-string TOKENS.

    Each argument is one token: hex digits (spaces inside one argument
    separate hex groups) or a string in quotes, e.g. '"Hello"'.
    Without --write the result is only previewed.  Nothing is written
    if any token fails to parse.
    """
    from bytedit.cli import _editor_session
    from bytedit.engine.numbers import parse_offset

    with _editor_session(ctx, path) as (ed, console):
        start = parse_offset(offset)
        parsed, applied = ed.edit(start, list(tokens))
        format_patch_errors(parsed, console)
        if parsed.errors:
            raise SystemExit(1)
        format_apply(applied, console)
        records = max(1, -(-len(parsed.data) // ed.record_length))
        format_dump(ed.dump(start, records), console)

        if not do_write:
            console.print("[dim]Preview only; use --write to save.[/dim]")
            ed.discard()
            return
        try:
            format_commit(ed.write(), console)
        except CommitError as exc:
            format_commit_error(exc, console)
            raise SystemExit(1) from None
