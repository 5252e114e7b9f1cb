"""
Capture: move items from the live filesystem into the recycle bin.

Each item is validated, recorded in the store and then relocated into the
payload area under a fresh ID. Items are processed one at a time and a
failing item never stops the rest of the batch.

Usage:
    >>> service = CaptureService(config, store, payloads, IdGenerator())
    >>> report = service.capture(["notes.txt", "old-project/"])
    >>> report.ok
    True
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from recyclebin.core.bin import fsutil
from recyclebin.core.bin.errors import (
    ForbiddenError,
    InsufficientSpaceError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RecycleBinError,
    RelocationError,
)
from recyclebin.core.config.models import BinConfig
from recyclebin.core.ids.generator import IdGenerator
from recyclebin.core.payload.area import PayloadArea
from recyclebin.core.records.models import DELETION_DATE_FORMAT, ItemKind, Record
from recyclebin.core.records.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class CaptureFailure:
    """One item that could not be captured."""

    path: str
    error: RecycleBinError


@dataclass
class CaptureReport:
    """Outcome of a capture batch."""

    captured: list[Record] = field(default_factory=list)
    failures: list[CaptureFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """A batch succeeds if at least one item was captured."""
        return bool(self.captured)


class CaptureService:
    """
    Service implementing the delete operation.

    Example:
        >>> service = CaptureService(config, store, payloads, IdGenerator())
        >>> record = service.capture_one("notes.txt")
        >>> record.original_name
        'notes.txt'
    """

    def __init__(
        self,
        config: BinConfig,
        store: RecordStore,
        payloads: PayloadArea,
        ids: IdGenerator,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.store = store
        self.payloads = payloads
        self.ids = ids
        self._now = now

    def capture(self, paths: Iterable[str | os.PathLike[str]]) -> CaptureReport:
        """
        Capture every path, continuing past failures.

        Raises:
            NotFoundError: If no path was given at all
        """
        items = [os.fspath(p) for p in paths]
        if not items:
            logger.error("Attempt to delete with no arguments provided")
            raise NotFoundError("No file or directory specified")

        report = CaptureReport()
        for item in items:
            try:
                report.captured.append(self.capture_one(item))
            except RecycleBinError as e:
                report.failures.append(CaptureFailure(path=item, error=e))
        return report

    def capture_one(self, item: str | os.PathLike[str]) -> Record:
        """
        Capture a single item.

        Returns:
            The Record written for the item

        Raises:
            NotFoundError: The item does not exist
            ForbiddenError: The item is the bin, inside it, or contains it
            PermissionDeniedError: The caller cannot read/write or remove it
            QuotaExceededError: The bin size limit would be exceeded
            InsufficientSpaceError: The payload filesystem lacks room
            StoreUnwritableError: The record could not be written
            RelocationError: The move failed after the record was written
        """
        raw = os.fspath(item)
        try:
            return self._capture(raw)
        except RecycleBinError as e:
            logger.error("Failed to delete '%s': %s", raw, e)
            raise

    def _capture(self, raw: str) -> Record:
        path = Path(os.path.abspath(raw))

        if not os.path.lexists(path):
            raise NotFoundError(f"'{raw}' does not exist")

        kind = fsutil.classify(path)
        self._check_containment(path, kind)
        self._check_permissions(raw, path)

        size = fsutil.item_size(path, kind)

        occupied = self.store.total_size()
        if occupied + size > self.config.max_bytes:
            raise QuotaExceededError(raw, size, occupied, self.config.max_bytes)

        available = fsutil.free_bytes(self.payloads.files_dir)
        if available < size:
            raise InsufficientSpaceError(raw, size, available)

        st = os.lstat(path)
        record = Record(
            id=self.ids.next_id(),
            original_name=path.name,
            original_path=str(path),
            deletion_date=self._now().strftime(DELETION_DATE_FORMAT),
            size=size,
            kind=kind,
            mode=fsutil.mode_string(st),
            owner=fsutil.owner_string(st),
        )

        self.store.append(record)

        try:
            self.payloads.store(path, record.id, kind)
        except OSError as e:
            # The record stays behind as an orphan until purge reconciles it
            raise RelocationError(
                f"Failed to move '{raw}' to Recycle Bin (record {record.id} left orphaned): {e}"
            ) from e

        logger.info("'%s' moved to Recycle Bin with ID %s", record.original_name, record.id)
        return record

    def _check_containment(self, path: Path, kind: ItemKind) -> None:
        root_abs = Path(os.path.abspath(self.config.root))
        root_real = Path(os.path.realpath(self.config.root))
        # Resolve the parent only, so a symlink item is judged as the link itself
        path_real = Path(os.path.realpath(path.parent)) / path.name

        for candidate in (path, path_real):
            if fsutil.is_within(candidate, root_abs) or fsutil.is_within(candidate, root_real):
                raise ForbiddenError("Cannot delete the Recycle Bin itself")

        if kind is ItemKind.DIRECTORY:
            for root in (root_abs, root_real):
                if fsutil.is_within(root, path_real) or fsutil.is_within(root, path):
                    raise ForbiddenError(
                        f"Cannot delete '{path}': it contains the Recycle Bin"
                    )

    def _check_permissions(self, raw: str, path: Path) -> None:
        if os.access in os.supports_follow_symlinks:
            readable_writable = os.access(path, os.R_OK | os.W_OK, follow_symlinks=False)
        else:
            readable_writable = os.access(path, os.R_OK | os.W_OK)
        if not readable_writable:
            raise PermissionDeniedError(f"No permission to delete '{raw}'")

        if not os.access(path.parent, os.W_OK | os.X_OK):
            raise PermissionDeniedError(
                f"No permission to remove '{raw}' from {path.parent}"
            )
