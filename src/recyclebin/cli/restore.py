"""
recyclebin CLI - Restore command.

Move a recycled item back to its original location.
"""

import typer
from rich.markup import escape

from recyclebin.cli.context import locked, open_bin
from recyclebin.cli.errors import (
    ExitCode,
    console,
    fail,
    print_incompatible_flags_error,
    print_warning,
)
from recyclebin.cli.resolvers import PromptConflictResolver
from recyclebin.core.bin.errors import RecycleBinError
from recyclebin.core.lifecycle.recall import ConflictDecision, ConflictResolver, FixedResolver


def restore(
    ctx: typer.Context,
    target: str = typer.Argument(
        ...,
        help="Recycle ID or original file name",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace whatever exists at the original location",
    ),
    rename: bool = typer.Option(
        False,
        "--rename",
        help="Restore under a timestamped name if the location is taken",
    ),
    cancel_on_conflict: bool = typer.Option(
        False,
        "--cancel-on-conflict",
        help="Leave the item in the bin if the location is taken",
    ),
) -> None:
    """
    Restore an item by ID or original file name.

    If something already exists at the original location you are asked
    whether to overwrite it, restore under a new name, or cancel. The
    --overwrite, --rename and --cancel-on-conflict flags answer in advance.

    Examples:
        recyclebin restore 1730300000123456789_4242
        recyclebin restore notes.txt --rename
    """
    chosen = [
        (flag, decision)
        for flag, decision, enabled in (
            ("--overwrite", ConflictDecision.OVERWRITE, overwrite),
            ("--rename", ConflictDecision.RENAME, rename),
            ("--cancel-on-conflict", ConflictDecision.CANCEL, cancel_on_conflict),
        )
        if enabled
    ]
    if len(chosen) > 1:
        print_incompatible_flags_error(chosen[0][0], chosen[1][0])
        raise typer.Exit(ExitCode.USER_ERROR)

    resolver: ConflictResolver
    if chosen:
        resolver = FixedResolver(chosen[0][1])
    else:
        resolver = PromptConflictResolver()

    recycle_bin = open_bin(ctx)

    with locked(recycle_bin):
        try:
            result = recycle_bin.recall(target, resolver=resolver)
        except RecycleBinError as e:
            fail(e)

    if result.cancelled:
        console.print("Restore cancelled.")
        return

    for warning in result.warnings:
        print_warning(warning)

    console.print(
        f"[green]✓[/green] Restored '{escape(result.record.original_name)}' "
        f"to '{escape(str(result.destination))}'"
    )
