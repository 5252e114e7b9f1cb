"""
recyclebin CLI - Quota command.
"""

import typer

from recyclebin.cli.cleanup import print_cleanup_report
from recyclebin.cli.context import locked, open_bin
from recyclebin.cli.errors import console, fail
from recyclebin.core.bin.errors import RecycleBinError
from recyclebin.core.query.service import format_size


def quota(
    ctx: typer.Context,
    no_cleanup: bool = typer.Option(
        False,
        "--no-cleanup",
        help="Only report; do not run cleanup when the quota is exceeded",
    ),
) -> None:
    """
    Show bin usage against MAX_SIZE_MB.

    When the quota is exceeded, cleanup of expired items runs automatically
    unless --no-cleanup is given.
    """
    recycle_bin = open_bin(ctx)
    purger = recycle_bin.purger

    # Inspection needs no lock; remediation does
    try:
        if purger.quota_status().exceeded and not no_cleanup:
            with locked(recycle_bin):
                report = purger.check_quota(auto_cleanup=True)
        else:
            report = purger.check_quota(auto_cleanup=False)
    except RecycleBinError as e:
        fail(e)

    console.print("[bold]Recycle Bin Quota Status[/bold]")
    console.print(f"{'Total used:':<25} {format_size(report.used_bytes)}")
    console.print(f"{'Quota limit:':<25} {report.max_size_mb} MB")
    console.print(f"{'Usage:':<25} {report.usage_percent}%")

    if report.exceeded:
        console.print("[red]WARNING: Recycle bin exceeds quota limit![/red]")
        if report.cleanup is not None:
            console.print("Triggered automatic cleanup...")
            print_cleanup_report(report.cleanup)
