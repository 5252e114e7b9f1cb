"""
Recall: move a captured item back to where it came from.

What happens when something already occupies the original location is not
decided here. A ConflictResolver chooses between overwriting, restoring
under a new name, or cancelling, so the same code runs behind an
interactive prompt or a fixed policy.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from recyclebin.core.bin import fsutil
from recyclebin.core.bin.errors import (
    DestinationUnwritableError,
    InsufficientSpaceError,
    PayloadMissingError,
    RecycleBinError,
)
from recyclebin.core.payload.area import PayloadArea
from recyclebin.core.records.models import ItemKind, Record
from recyclebin.core.records.store import RecordStore

logger = logging.getLogger(__name__)


class ConflictDecision(str, Enum):
    """How to proceed when the restore destination is occupied."""

    OVERWRITE = "overwrite"
    RENAME = "rename"
    CANCEL = "cancel"


@runtime_checkable
class ConflictResolver(Protocol):
    """Decides what to do when a restore destination already exists."""

    def resolve(self, record: Record, destination: Path) -> ConflictDecision:
        """
        Choose an outcome for restoring ``record`` onto ``destination``.

        Args:
            record: Record being restored
            destination: Existing path that would be replaced

        Returns:
            The decision to apply
        """
        ...


class FixedResolver:
    """Resolver that always returns the same decision."""

    def __init__(self, decision: ConflictDecision) -> None:
        self.decision = decision

    def resolve(self, record: Record, destination: Path) -> ConflictDecision:
        return self.decision


@dataclass
class RecallResult:
    """Outcome of a restore."""

    record: Record
    destination: Path
    cancelled: bool = False
    renamed: bool = False
    warnings: list[str] = field(default_factory=list)


class RecallService:
    """
    Service implementing the restore operation.

    Example:
        >>> service = RecallService(store, payloads, FixedResolver(ConflictDecision.RENAME))
        >>> result = service.recall("notes.txt")
        >>> result.destination
        PosixPath('/home/ines/notes.txt')
    """

    def __init__(
        self,
        store: RecordStore,
        payloads: PayloadArea,
        resolver: ConflictResolver,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.payloads = payloads
        self.resolver = resolver
        self._clock = clock

    def recall(self, target: str) -> RecallResult:
        """
        Restore the item identified by ``target`` (an ID or an original name).

        Raises:
            NotFoundError: No record matches ``target``
            PayloadMissingError: The record's payload is gone
            DestinationUnwritableError: The destination cannot be created or written
            InsufficientSpaceError: The destination filesystem lacks room
            StoreUnwritableError: The record could not be removed afterwards
        """
        try:
            return self._recall(target)
        except RecycleBinError as e:
            logger.error("Restore failed for '%s': %s", target, e)
            raise

    def _recall(self, target: str) -> RecallResult:
        record = self.store.find_by(target)

        if not self.payloads.exists(record.id):
            raise PayloadMissingError(record.id, record.original_name)

        destination = Path(record.original_path)
        self._prepare_parent(destination)

        decision: ConflictDecision | None = None
        if os.path.lexists(destination):
            decision = self.resolver.resolve(record, destination)
            if decision is ConflictDecision.CANCEL:
                logger.info("Restore cancelled: %s (%s)", record.original_name, record.id)
                return RecallResult(record=record, destination=destination, cancelled=True)
            if decision is ConflictDecision.RENAME:
                destination = self._renamed_destination(destination)

        available = fsutil.free_bytes(destination.parent)
        if available < record.size:
            raise InsufficientSpaceError(str(destination), record.size, available)

        # Only replace the existing entry once the restore is known to fit
        if decision is ConflictDecision.OVERWRITE:
            self._clear_destination(destination)
        renamed = decision is ConflictDecision.RENAME

        try:
            self.payloads.release(record.id, destination)
        except OSError as e:
            raise DestinationUnwritableError(
                f"Failed to move '{record.original_name}' back to {destination}: {e}"
            ) from e

        result = RecallResult(record=record, destination=destination, renamed=renamed)
        result.warnings.extend(self._restore_attributes(record, destination))

        self.store.remove(record.id)
        logger.info("Restored %s (%s) -> %s", record.original_name, record.id, destination)
        return result

    def _prepare_parent(self, destination: Path) -> None:
        parent = destination.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationUnwritableError(
                f"Cannot create destination directory {parent}: {e}"
            ) from e
        if not os.access(parent, os.W_OK | os.X_OK):
            raise DestinationUnwritableError(f"Cannot restore to read-only directory {parent}")

    def _renamed_destination(self, destination: Path) -> Path:
        stem = f"{destination.name}_restored_{int(self._clock())}"
        candidate = destination.with_name(stem)
        counter = 1
        while os.path.lexists(candidate):
            candidate = destination.with_name(f"{stem}_{counter}")
            counter += 1
        return candidate

    def _clear_destination(self, destination: Path) -> None:
        try:
            fsutil.remove_entry(destination)
        except OSError as e:
            raise DestinationUnwritableError(
                f"Cannot overwrite existing {destination}: {e}"
            ) from e

    def _restore_attributes(self, record: Record, destination: Path) -> list[str]:
        """Best-effort restore of permissions and owner; returns warnings."""
        warnings: list[str] = []

        if record.kind is not ItemKind.SYMLINK and record.mode:
            try:
                os.chmod(destination, int(record.mode, 8))
            except (OSError, ValueError) as e:
                warnings.append(f"Could not restore permissions {record.mode}: {e}")

        if record.owner:
            ids = fsutil.resolve_owner(record.owner)
            if ids is None:
                warnings.append(f"Unknown owner {record.owner}; ownership not restored")
            else:
                uid, gid = ids
                st = os.lstat(destination)
                if (st.st_uid, st.st_gid) != (uid, gid):
                    try:
                        os.lchown(destination, uid, gid)
                    except OSError as e:
                        warnings.append(f"Could not restore owner {record.owner}: {e}")

        for warning in warnings:
            logger.warning("%s (%s): %s", record.original_name, record.id, warning)
        return warnings
