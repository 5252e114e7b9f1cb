"""
Interactive conflict resolution for restore.
"""

from pathlib import Path

import typer
from rich.markup import escape

from recyclebin.cli.errors import console
from recyclebin.core.lifecycle.recall import ConflictDecision
from recyclebin.core.records.models import Record

_CHOICES = {
    "o": ConflictDecision.OVERWRITE,
    "overwrite": ConflictDecision.OVERWRITE,
    "r": ConflictDecision.RENAME,
    "rename": ConflictDecision.RENAME,
    "c": ConflictDecision.CANCEL,
    "cancel": ConflictDecision.CANCEL,
}


class PromptConflictResolver:
    """Ask on the terminal whether to overwrite, rename or cancel."""

    def resolve(self, record: Record, destination: Path) -> ConflictDecision:
        console.print("[yellow]File already exists at destination:[/yellow]")
        console.print(f"  {escape(str(destination))}")
        answer = typer.prompt("Overwrite (o), rename (r), or cancel (c)?", default="c")
        # Anything unrecognized is treated as cancel
        return _CHOICES.get(answer.strip().lower(), ConflictDecision.CANCEL)
