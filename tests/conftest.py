"""
Pytest configuration and shared fixtures.

Provides fixtures for a temporary recycle bin, a workspace of files to
delete, and a factory for hand-built records.
"""

import logging
import os
from pathlib import Path

import pytest

from recyclebin.core.bin.layout import BinLayout
from recyclebin.core.config.loader import load_config
from recyclebin.core.config.models import BinConfig
from recyclebin.core.ids.generator import IdGenerator
from recyclebin.core.records.models import ItemKind, Record
from recyclebin.core.recycle_bin import RecycleBin

# Permission checks are meaningless for root, who bypasses them
requires_non_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="permission checks do not apply to root",
)


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def bin_root(tmp_path: Path) -> Path:
    """Location of the recycle bin (not yet created)."""
    return tmp_path / "bin"


@pytest.fixture
def layout(bin_root: Path) -> BinLayout:
    """An initialized bin layout."""
    layout = BinLayout(bin_root)
    layout.initialize()
    return layout


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory holding files for tests to delete."""
    work = tmp_path / "work"
    work.mkdir()
    return work


# ==============================================================================
# Bin Fixtures
# ==============================================================================


@pytest.fixture
def bin_config(layout: BinLayout) -> BinConfig:
    """Configuration of the test bin, ignoring the process environment."""
    return load_config(layout, environ={})


@pytest.fixture
def recycle_bin(bin_config: BinConfig) -> RecycleBin:
    """A ready-to-use recycle bin."""
    recycle_bin = RecycleBin(bin_config, ids=IdGenerator())
    recycle_bin.initialize()
    return recycle_bin


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""

    def _make(
        record_id: str = "1700000000000000000_100",
        name: str = "notes.txt",
        path: str | None = None,
        deletion_date: str = "2025-01-15 10:30:00",
        size: int = 10,
        kind: ItemKind = ItemKind.FILE,
        mode: str = "644",
        owner: str = "0:0",
    ) -> Record:
        return Record(
            id=record_id,
            original_name=name,
            original_path=path or f"/home/user/{name}",
            deletion_date=deletion_date,
            size=size,
            kind=kind,
            mode=mode,
            owner=owner,
        )

    return _make


@pytest.fixture(autouse=True)
def reset_recyclebin_logger():
    """Detach handlers added by configure_logging so tests stay independent."""
    yield
    logger = logging.getLogger("recyclebin")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
