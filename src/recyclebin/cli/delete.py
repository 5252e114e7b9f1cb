"""
recyclebin CLI - Delete command.

Move files and directories into the recycle bin.
"""

import typer
from rich.markup import escape

from recyclebin.cli.context import locked, open_bin
from recyclebin.cli.errors import ExitCode, console, print_bin_error, print_usage_error
from recyclebin.core.bin.errors import NotFoundError


def delete(
    ctx: typer.Context,
    paths: list[str] | None = typer.Argument(
        None,
        help="Files or directories to move to the recycle bin",
        show_default=False,
    ),
) -> None:
    """
    Move one or more files or directories to the recycle bin.

    Each item is handled on its own: a missing or protected item is
    reported and the rest are still deleted. The command fails only if
    nothing could be deleted.

    Examples:
        recyclebin delete notes.txt
        recyclebin delete file1.txt file2.txt Documents/
    """
    recycle_bin = open_bin(ctx)

    with locked(recycle_bin):
        try:
            report = recycle_bin.capture(paths or [])
        except NotFoundError as e:
            print_usage_error(str(e), "recyclebin delete <file/dir> [...]")
            raise typer.Exit(ExitCode.USER_ERROR) from e

    for record in report.captured:
        console.print(
            f"[green]✓[/green] '{escape(record.original_name)}' moved to Recycle Bin "
            f"[dim]({record.id})[/dim]"
        )

    for failure in report.failures:
        print_bin_error(failure.error)

    if not report.ok:
        raise typer.Exit(ExitCode.GENERAL_ERROR)
