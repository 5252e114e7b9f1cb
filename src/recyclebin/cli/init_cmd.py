"""
recyclebin CLI - Init command.
"""

import typer
from rich.markup import escape

from recyclebin.cli.context import open_bin
from recyclebin.cli.errors import console


def main(ctx: typer.Context) -> None:
    """
    Create the recycle bin directory structure and default configuration.

    Running it again is safe: existing files are left as they are.
    """
    recycle_bin = open_bin(ctx)
    layout = recycle_bin.layout

    console.print(f"[green]✓[/green] Recycle bin ready at {escape(str(layout.root))}")
    console.print(f"  [dim]Config:   {escape(str(layout.config_file))}[/dim]")
    console.print(f"  [dim]Metadata: {escape(str(layout.metadata_file))}[/dim]")
    console.print(f"  [dim]Files:    {escape(str(layout.files_dir))}[/dim]")
    console.print(f"  [dim]Log:      {escape(str(layout.log_file))}[/dim]")
    console.print(
        f"  MAX_SIZE_MB={recycle_bin.config.max_size_mb} "
        f"RETENTION_DAYS={recycle_bin.config.retention_days}"
    )
