"""
recyclebin CLI - List command.

Show the contents of the recycle bin.
"""

import typer

from recyclebin.cli.context import open_bin
from recyclebin.cli.errors import console
from recyclebin.cli.render import print_record_details, records_table
from recyclebin.core.query.service import format_size


def list_items(
    ctx: typer.Context,
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Show every recorded field for each item",
    ),
) -> None:
    """
    List recycled items.

    The normal view shows ID, name, deletion date and size; --detailed
    adds original path, type, permissions and owner.

    Examples:
        recyclebin list
        recyclebin list --detailed
    """
    recycle_bin = open_bin(ctx)
    listing = recycle_bin.listing()

    if listing.is_empty:
        console.print("[yellow]Recycle Bin is empty.[/yellow]")
        return

    console.print("[yellow]Recycle Bin Contents:[/yellow]")
    if detailed:
        for record in listing.records:
            print_record_details(console, record)
    else:
        console.print(records_table(listing.records))

    console.print(f"Total items: {listing.total_items}")
    console.print(f"Total space used: {format_size(listing.total_bytes)}")
