"""bytedit CLI -- terminal interface for the byte-level editor.

This module is NEVER imported from bytedit/__init__.py.
It is only loaded via the ``bytedit`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install bytedit[cli]"
    ) from None

from bytedit.cli.formatting import format_error, get_console
from bytedit.engine.position import MAX_RECORD_LENGTH

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from bytedit.editor import Editor


@click.group()
@click.option(
    "-l",
    "--record-length",
    default=256,
    type=click.IntRange(1, MAX_RECORD_LENGTH),
    envvar="BYTEDIT_RECORD_LENGTH",
    show_default=True,
    help="Logical record length in bytes.",
)
@click.option(
    "-w",
    "--width",
    default="16",
    type=click.Choice(["16", "32"]),
    envvar="BYTEDIT_WIDTH",
    show_default=True,
    help="Bytes per dump line.",
)
@click.option(
    "--write-attempts",
    default=1,
    type=click.IntRange(min=1),
    envvar="BYTEDIT_WRITE_ATTEMPTS",
    help="Tries per byte before a write error aborts a commit.",
)
@click.pass_context
def cli(ctx: click.Context, record_length: int, width: str, write_attempts: int) -> None:
    """bytedit: view and patch files byte by byte, by offset or by record."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = {
        "record_length": record_length,
        "bytes_per_line": int(width),
        "write_attempts": write_attempts,
    }


def _get_editor(ctx: click.Context, path: str, **overrides: object) -> "Editor":  # noqa: F821 (forward ref)
    """Open an Editor using the group-level options from Click context."""
    from bytedit.editor import Editor

    options = dict(ctx.obj["config"])
    options.update(overrides)
    return Editor.open(path, **options)


@contextmanager
def _editor_session(
    ctx: click.Context, path: str, **overrides: object
) -> Iterator[tuple[Editor, Console]]:
    """Context manager that opens an Editor, yields (editor, console), and handles cleanup.

    Ensures the editor is closed on exit and formats exceptions as CLI errors.
    """
    console = get_console()
    try:
        ed = _get_editor(ctx, path, **overrides)
        try:
            yield ed, console
        finally:
            ed.close()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from bytedit.cli.commands.edit import edit  # noqa: E402
from bytedit.cli.commands.dump import dump  # noqa: E402
from bytedit.cli.commands.patch import patch  # noqa: E402

cli.add_command(edit)
cli.add_command(dump)
cli.add_command(patch)
