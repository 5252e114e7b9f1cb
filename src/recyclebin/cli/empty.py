"""
recyclebin CLI - Empty command.

Permanently delete everything in the bin, or a single item.
"""

import typer
from rich.markup import escape

from recyclebin.cli.context import locked, open_bin
from recyclebin.cli.errors import console, fail, print_warning
from recyclebin.core.bin.errors import RecycleBinError
from recyclebin.core.query.service import format_size


def _ask(prompt: str) -> bool:
    return typer.confirm(prompt, default=False)


def empty(
    ctx: typer.Context,
    record_id: str | None = typer.Argument(
        None,
        help="ID of a single item to delete (default: everything)",
        show_default=False,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """
    Permanently delete all recycled items, or one item by ID.

    Asks for confirmation unless --force is given.

    Examples:
        recyclebin empty
        recyclebin empty 1730300000123456789_4242
        recyclebin empty --force
    """
    recycle_bin = open_bin(ctx)
    confirm = None if force else _ask

    with locked(recycle_bin):
        try:
            if record_id is None:
                result = recycle_bin.purger.empty_all(confirm=confirm)
            else:
                result = recycle_bin.purger.empty_item(record_id, confirm=confirm)
        except RecycleBinError as e:
            fail(e)

    if result.already_empty:
        console.print("Recycle bin is already empty.")
        return
    if result.cancelled:
        console.print("Operation cancelled.")
        return

    if record_id is None:
        console.print(
            f"[green]✓[/green] Emptied recycle bin ({result.count} items, "
            f"{format_size(result.bytes_freed)} freed)."
        )
        return

    record = result.removed[0]
    if result.payload_missing:
        print_warning(
            f"File data not found for '{record.original_name}' ({record.id}). Cleaned metadata."
        )
    else:
        console.print(
            f"[green]✓[/green] Permanently deleted '{escape(record.original_name)}' ({record.id})."
        )
