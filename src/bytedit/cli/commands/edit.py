"""bytedit edit -- interactive editing prompt."""

from __future__ import annotations

import click


@click.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--read-only", is_flag=True, help="Open read-only; edit and write commands are refused.")
@click.pass_context
def edit(ctx: click.Context, path: str, read_only: bool) -> None:
    """Open PATH at the interactive prompt (h for help)."""
    from bytedit.cli import _editor_session
    from bytedit.cli.repl import CommandInterpreter

    with _editor_session(ctx, path, read_only=read_only) as (ed, console):
        CommandInterpreter(ed, console).run()
