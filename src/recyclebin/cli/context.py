"""
Per-invocation setup shared by every command.

Resolves the bin root, creates any missing part of the bin, points logging
at its log file, loads its configuration and hands back a RecycleBin.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from recyclebin.cli.errors import ExitCode, print_bin_error, print_error, print_warning
from recyclebin.core.bin.binlog import configure_logging
from recyclebin.core.bin.errors import BinBusyError
from recyclebin.core.bin.layout import BinLayout, default_bin_root
from recyclebin.core.config.loader import load_config
from recyclebin.core.recycle_bin import RecycleBin


def resolve_bin_root(ctx: typer.Context) -> Path:
    """Bin root from ``--bin-dir``, else RECYCLEBIN_DIR, else ~/.recycle_bin."""
    obj = ctx.obj or {}
    bin_dir = obj.get("bin_dir")
    if bin_dir is not None:
        return Path(bin_dir).expanduser()
    return default_bin_root()


def open_bin(ctx: typer.Context) -> RecycleBin:
    """
    Prepare the bin for a command.

    Configuration warnings are printed once here; they have already been
    written to the bin log by the loader.
    """
    obj = ctx.obj or {}
    layout = BinLayout(Path(resolve_bin_root(ctx)).absolute())

    try:
        layout.initialize()
    except OSError as e:
        print_error(f"Cannot initialize recycle bin at {layout.root}: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    configure_logging(layout, debug=obj.get("debug", False))
    config = load_config(layout)

    for warning in config.warnings:
        print_warning(warning)

    return RecycleBin(config)


@contextmanager
def locked(recycle_bin: RecycleBin) -> Iterator[None]:
    """
    Hold the bin lock for the enclosed block, exiting with BUSY on contention.

    Errors raised inside the block propagate unchanged.
    """
    lock = recycle_bin.lock()
    try:
        lock.acquire()
    except BinBusyError as e:
        print_bin_error(e)
        raise typer.Exit(ExitCode.BUSY) from e

    try:
        yield
    finally:
        lock.release()
