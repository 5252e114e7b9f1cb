"""
Standardized error handling and exit codes for the recyclebin CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from recyclebin.core.bin.errors import (
    BinBusyError,
    DestinationUnwritableError,
    ForbiddenError,
    InsufficientSpaceError,
    NotFoundError,
    PayloadMissingError,
    PermissionDeniedError,
    QuotaExceededError,
    RecycleBinError,
    StoreUnwritableError,
)

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for recyclebin CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """The operation failed (or every item of a batch failed)."""

    USER_ERROR = 2
    """Missing or invalid arguments (actionable by user)."""

    BUSY = 75
    """Another invocation holds the bin lock (EX_TEMPFAIL)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Item not found: notes.txt",
        ...     solution="recyclebin list  # to see recycled items",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


# Guidance shown for each error type
_SOLUTIONS: dict[type[RecycleBinError], str] = {
    NotFoundError: "recyclebin list  # to see recycled items",
    ForbiddenError: "pick a path outside the recycle bin",
    PermissionDeniedError: "check the permissions of the item and its directory",
    QuotaExceededError: "recyclebin cleanup  # or raise MAX_SIZE_MB in the bin config",
    InsufficientSpaceError: "free some disk space and retry",
    PayloadMissingError: "recyclebin purge  # to drop entries whose data is gone",
    DestinationUnwritableError: "check permissions on the original location",
    StoreUnwritableError: "check permissions on the recycle bin directory",
    BinBusyError: "wait for the other recyclebin command to finish",
}


def print_bin_error(error: RecycleBinError) -> None:
    """Print a recycle bin error with the guidance for its type."""
    solution = None
    for error_type, hint in _SOLUTIONS.items():
        if isinstance(error, error_type):
            solution = hint
            break
    print_error(str(error), solution=solution)


def exit_code_for(error: RecycleBinError) -> ExitCode:
    if isinstance(error, BinBusyError):
        return ExitCode.BUSY
    return ExitCode.GENERAL_ERROR


def fail(error: RecycleBinError) -> NoReturn:
    """Print ``error`` and exit with its exit code."""
    print_bin_error(error)
    raise typer.Exit(exit_code_for(error))


def print_usage_error(problem: str, usage: str) -> None:
    """Print error for a missing or invalid argument."""
    print_error(problem, solution=usage)


def print_incompatible_flags_error(flag1: str, flag2: str, reason: str | None = None) -> None:
    """Print error when incompatible CLI flags are used together."""
    problem = f"Cannot use {flag1} with {flag2}"

    if reason:
        print_error(problem, reason=reason)
    else:
        print_error(problem, solution=f"Remove one of the flags: {flag1} or {flag2}")


__all__ = [
    "ExitCode",
    "console",
    "exit_code_for",
    "fail",
    "print_bin_error",
    "print_error",
    "print_incompatible_flags_error",
    "print_usage_error",
    "print_warning",
]
