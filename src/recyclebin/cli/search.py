"""
recyclebin CLI - Search command.

Find recycled items by name or original path.
"""

import logging

import typer
from rich.markup import escape

from recyclebin.cli.context import open_bin
from recyclebin.cli.errors import ExitCode, console, print_usage_error
from recyclebin.cli.render import records_table

logger = logging.getLogger(__name__)


def search(
    ctx: typer.Context,
    pattern: str = typer.Argument(
        "",
        help="Wildcard pattern (e.g. '*.pdf') or plain text to look for",
        show_default=False,
    ),
    ignore_case: bool = typer.Option(
        False,
        "--ignore-case",
        "-i",
        help="Match regardless of letter case",
    ),
) -> None:
    """
    Search recycled items by original name or path.

    Patterns containing *, ? or [ are shell wildcards matched against the
    whole name or path; anything else matches as plain text.

    Examples:
        recyclebin search report
        recyclebin search "*.pdf" --ignore-case
    """
    recycle_bin = open_bin(ctx)

    if not pattern:
        logger.error("Search attempt with no pattern")
        print_usage_error("No search pattern specified", "recyclebin search <pattern> [-i]")
        raise typer.Exit(ExitCode.USER_ERROR)

    result = recycle_bin.search(pattern, ignore_case=ignore_case)
    logger.info("Search for '%s' found %d matches", pattern, result.total_matches)

    if not result.has_matches:
        console.print(f"[yellow]No matches found for '{escape(pattern)}'.[/yellow]")
        return

    console.print(f"[yellow]Search results for '{escape(pattern)}':[/yellow]")
    console.print(records_table(result.matches))
    console.print(f"Total matches found: {result.total_matches}")
