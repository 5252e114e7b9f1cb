"""
recyclebin CLI - Cleanup command.

Remove items older than the retention period.
"""

import typer

from recyclebin.cli.context import locked, open_bin
from recyclebin.cli.errors import console, fail, print_warning
from recyclebin.core.bin.errors import RecycleBinError
from recyclebin.core.purge.service import CleanupReport
from recyclebin.core.query.service import format_size


def print_cleanup_report(report: CleanupReport) -> None:
    """Summary shared by cleanup and quota remediation."""
    console.print("[bold]Auto Cleanup Summary[/bold]")
    console.print(f"{'Retention period:':<25} {report.retention_days} days")
    console.print(f"{'Items deleted:':<25} {report.deleted_count} items")
    console.print(f"{'Space freed:':<25} {format_size(report.bytes_freed)}")

    if report.missing_payloads:
        print_warning(
            f"{len(report.missing_payloads)} expired entries had no data file; "
            "their metadata was removed"
        )
    if report.skipped_unparsable:
        print_warning(
            f"{len(report.skipped_unparsable)} entries have an unreadable deletion date "
            "and were kept"
        )
    if report.failed:
        print_warning(f"{len(report.failed)} expired items could not be deleted")


def cleanup(ctx: typer.Context) -> None:
    """
    Permanently delete items older than RETENTION_DAYS (from the bin config).
    """
    recycle_bin = open_bin(ctx)

    with locked(recycle_bin):
        try:
            report = recycle_bin.purger.auto_cleanup()
        except RecycleBinError as e:
            fail(e)

    print_cleanup_report(report)
