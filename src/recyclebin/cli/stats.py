"""
recyclebin CLI - Stats command.
"""

import logging

import typer
from rich.markup import escape
from rich.table import Table

from recyclebin.cli.context import open_bin
from recyclebin.cli.errors import console
from recyclebin.core.query.service import format_size

logger = logging.getLogger(__name__)


def stats(ctx: typer.Context) -> None:
    """
    Show statistics: item counts and sizes by type, age range and quota use.
    """
    recycle_bin = open_bin(ctx)
    summary = recycle_bin.stats()

    if summary.is_empty:
        console.print("[yellow]Recycle Bin is empty.[/yellow]")
        logger.info("Stats: no data to display")
        return

    console.print("[bold]Recycle Bin Statistics[/bold]")
    console.print(f"Total items: {summary.total_items}")
    console.print(f"Total size: {format_size(summary.total_bytes)}")
    console.print(
        f"Quota usage: {summary.usage_percent}% of "
        f"{format_size(summary.max_bytes)}"
    )
    console.print(f"Average item size: {format_size(summary.average_bytes)}")

    table = Table(show_header=True, header_style="bold green")
    table.add_column("Type")
    table.add_column("Items", justify="right")
    table.add_column("Size", justify="right")
    for kind, kind_stats in summary.by_kind.items():
        table.add_row(kind.value, str(kind_stats.count), format_size(kind_stats.bytes))
    console.print(table)

    if summary.oldest is not None and summary.newest is not None:
        console.print(
            f"Oldest item: {escape(summary.oldest.original_name)} "
            f"({summary.oldest.deletion_date})"
        )
        console.print(
            f"Newest item: {escape(summary.newest.original_name)} "
            f"({summary.newest.deletion_date})"
        )

    logger.info(
        "Stats: %d items, %dB", summary.total_items, summary.total_bytes
    )
