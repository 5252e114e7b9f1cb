"""
recyclebin CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

from recyclebin import __version__
from recyclebin.cli import (
    cleanup,
    delete,
    empty,
    init_cmd,
    list_cmd,
    preview,
    purge,
    quota,
    restore,
    search,
    stats,
)
from recyclebin.cli.argv import preprocess_argv
from recyclebin.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_ITEMS = "Delete and Restore"
PANEL_INSPECT = "Inspect the Bin"
PANEL_MAINTAIN = "Maintain the Bin"

# Create the main Typer app
app = typer.Typer(
    name="recyclebin",
    help="Safe delete for Linux: move files to a recycle bin and restore them later",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    bin_dir: Path | None = typer.Option(
        None,
        "--bin-dir",
        help="Recycle bin location (default: $RECYCLEBIN_DIR or ~/.recycle_bin)",
        show_default=False,
    ),
) -> None:
    """
    recyclebin - a recycle bin for the command line.

    Deleted items are moved into a hidden bin directory together with
    enough metadata to put them back where they came from.

    Quick Start:
        recyclebin delete notes.txt old_dir/    # Move items to the bin
        recyclebin list                         # See what is in the bin
        recyclebin restore notes.txt            # Put an item back

    Maintenance:
        recyclebin cleanup                      # Drop items past RETENTION_DAYS
        recyclebin quota                        # Check usage against MAX_SIZE_MB
        recyclebin empty --force                # Delete everything for good
    """
    # Load layered env files early so RECYCLEBIN_* settings reach every command.
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    ctx.obj = {"debug": debug, "bin_dir": bin_dir}


# =============================================================================
# Delete and Restore
# =============================================================================

app.command(name="init", rich_help_panel=PANEL_ITEMS)(init_cmd.main)
app.command(name="delete", rich_help_panel=PANEL_ITEMS)(delete.delete)
app.command(name="restore", rich_help_panel=PANEL_ITEMS)(restore.restore)


# =============================================================================
# Inspect the Bin
# =============================================================================

app.command(name="list", rich_help_panel=PANEL_INSPECT)(list_cmd.list_items)
app.command(name="search", rich_help_panel=PANEL_INSPECT)(search.search)
app.command(name="stats", rich_help_panel=PANEL_INSPECT)(stats.stats)
app.command(name="preview", rich_help_panel=PANEL_INSPECT)(preview.preview)


# =============================================================================
# Maintain the Bin
# =============================================================================

app.command(name="empty", rich_help_panel=PANEL_MAINTAIN)(empty.empty)
app.command(name="cleanup", rich_help_panel=PANEL_MAINTAIN)(cleanup.cleanup)
app.command(name="quota", rich_help_panel=PANEL_MAINTAIN)(quota.quota)
app.command(name="purge", rich_help_panel=PANEL_MAINTAIN)(purge.purge)


@app.command(rich_help_panel=PANEL_MAINTAIN)
def version() -> None:
    """Show recyclebin version and exit."""
    console.print(f"recyclebin version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """
    Main CLI entry point.

    The argv preprocessor normalizes common patterns before Typer
    parses them (e.g. ``recyclebin --version``, ``recyclebin help restore``,
    ``recyclebin statistics``).
    """
    sys.argv[1:] = preprocess_argv(sys.argv[1:])
    app()


__all__ = ["app", "cli_main"]
