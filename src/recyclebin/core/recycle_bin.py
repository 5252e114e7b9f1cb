"""
RecycleBin: one object wiring every component of a bin together.

Interfaces (the CLI, tests) build a RecycleBin from a BinConfig and call its
services; the config is passed down explicitly rather than read globally.

Usage:
    >>> layout = BinLayout(Path("~/.recycle_bin").expanduser())
    >>> layout.initialize()
    >>> bin = RecycleBin(load_config(layout))
    >>> with bin.lock():
    ...     report = bin.capture(["notes.txt"])
    >>> bin.listing().total_items
    1
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from recyclebin.core.bin.layout import BinLayout
from recyclebin.core.bin.lock import BinLock
from recyclebin.core.config.models import BinConfig
from recyclebin.core.ids.generator import IdGenerator
from recyclebin.core.lifecycle.capture import CaptureReport, CaptureService
from recyclebin.core.lifecycle.recall import (
    ConflictDecision,
    ConflictResolver,
    FixedResolver,
    RecallResult,
    RecallService,
)
from recyclebin.core.payload.area import PayloadArea
from recyclebin.core.purge.service import PurgeService
from recyclebin.core.query.preview import DEFAULT_PREVIEW_LINES, Preview, preview
from recyclebin.core.query.service import (
    BinStats,
    Listing,
    SearchResult,
    compute_stats,
    list_records,
    search,
)
from recyclebin.core.records.store import RecordStore


class RecycleBin:
    """Facade over the record store, payload area and services of one bin."""

    def __init__(self, config: BinConfig, ids: IdGenerator | None = None) -> None:
        self.config = config
        self.layout = BinLayout(config.root)
        self.store = RecordStore(self.layout.metadata_file)
        self.payloads = PayloadArea(self.layout.files_dir)
        self.ids = ids or IdGenerator()
        self.purger = PurgeService(config, self.store, self.payloads)

    def initialize(self) -> None:
        self.layout.initialize()
        self.store.initialize()

    def lock(self, install_signal_handlers: bool = True) -> BinLock:
        """Exclusive guard to hold around mutating operations."""
        return BinLock(self.layout.lock_file, install_signal_handlers=install_signal_handlers)

    # Lifecycle

    def capture(self, paths: Iterable[str | os.PathLike[str]]) -> CaptureReport:
        service = CaptureService(self.config, self.store, self.payloads, self.ids)
        return service.capture(paths)

    def recall(self, target: str, resolver: ConflictResolver | None = None) -> RecallResult:
        if resolver is None:
            resolver = FixedResolver(ConflictDecision.CANCEL)
        return RecallService(self.store, self.payloads, resolver).recall(target)

    # Queries

    def listing(self) -> Listing:
        return list_records(self.store)

    def search(self, pattern: str, ignore_case: bool = False) -> SearchResult:
        return search(self.store, pattern, ignore_case=ignore_case)

    def stats(self) -> BinStats:
        return compute_stats(self.store, self.config)

    def preview(self, record_id: str, max_lines: int = DEFAULT_PREVIEW_LINES) -> Preview:
        return preview(self.store, self.payloads, record_id, max_lines=max_lines)
