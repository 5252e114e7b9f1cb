"""
Rich rendering of records for list, search and detail views.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from recyclebin.core.query.service import format_size
from recyclebin.core.records.models import Record


def records_table(records: Iterable[Record], title: str | None = None) -> Table:
    """Normal view: ID, original name, deletion date and size per record."""
    table = Table(title=title, show_header=True, header_style="bold green")
    table.add_column("ID", no_wrap=True)
    table.add_column("Original filename")
    table.add_column("Deletion date and time", no_wrap=True)
    table.add_column("File size", justify="right", no_wrap=True)

    for record in records:
        # Text cells so file names are never parsed as markup
        table.add_row(
            Text(record.id),
            Text(record.original_name),
            Text(record.deletion_date),
            Text(format_size(record.size)),
        )
    return table


def print_record_details(console: Console, record: Record) -> None:
    """Detailed view: every field of one record."""
    fields = [
        ("ID", record.id),
        ("Original name", record.original_name),
        ("Original path", record.original_path),
        ("Deletion date", record.deletion_date),
        ("Size", format_size(record.size)),
        ("Type", record.kind.value),
        ("Permissions", record.mode),
        ("Owner", record.owner),
    ]
    for label, value in fields:
        line = Text()
        line.append(f"{label + ':':<16} ", style="green")
        line.append(value)
        console.print(line)
    console.print()
