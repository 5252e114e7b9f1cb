"""
recyclebin CLI - Purge command.

Drop metadata entries whose data file is missing.
"""

import typer
from rich.markup import escape

from recyclebin.cli.context import locked, open_bin
from recyclebin.cli.errors import console, fail
from recyclebin.core.bin.errors import RecycleBinError


def purge(ctx: typer.Context) -> None:
    """
    Remove corrupted entries: records whose data no longer exists in the bin.

    Data files without a record are left untouched.
    """
    recycle_bin = open_bin(ctx)
    console.print("[yellow]Checking for corrupted entries...[/yellow]")

    with locked(recycle_bin):
        try:
            dropped = recycle_bin.purger.purge_corrupted()
        except RecycleBinError as e:
            fail(e)

    if not dropped:
        console.print("No corrupted entries found.")
        return

    for record in dropped:
        console.print(
            f"Removed corrupted entry for missing ID: {record.id} "
            f"({escape(record.original_name)})"
        )
    console.print(f"Purged {len(dropped)} corrupted entries.")
