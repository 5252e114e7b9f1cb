"""
recyclebin CLI - Preview command.
"""

import typer
from rich.markup import escape
from rich.text import Text

from recyclebin.cli.context import open_bin
from recyclebin.cli.errors import console, fail
from recyclebin.core.bin.errors import RecycleBinError
from recyclebin.core.query.service import format_size


def preview(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., help="Recycle ID of the item"),
    lines: int = typer.Option(10, "--lines", "-n", min=1, help="Lines of text to show"),
) -> None:
    """
    Peek at a recycled item without restoring it.

    Text files show their first lines, directories their entries, other
    files only their type.
    """
    recycle_bin = open_bin(ctx)

    try:
        result = recycle_bin.preview(record_id, max_lines=lines)
    except RecycleBinError as e:
        fail(e)

    record = result.record
    console.print(f"[bold]Preview of:[/bold] {escape(record.original_name)}")

    if result.is_text:
        for line in result.lines:
            console.print(Text(line))
        suffix = " (truncated)" if result.truncated else ""
        console.print(f"[dim](Showing first {len(result.lines)} lines{suffix})[/dim]")
    elif result.entries:
        label = "Link target" if record.kind.value == "symlink" else "Entries"
        console.print(f"{label}:")
        for entry in result.entries:
            console.print(Text(f"  {entry}"))
    else:
        console.print(
            f"Binary or non-text file detected: {result.mime_type}, "
            f"{format_size(record.size)}"
        )
