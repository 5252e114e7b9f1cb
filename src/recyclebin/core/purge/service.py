"""
Purge family: permanent removal and store reconciliation.

Operations:
- empty_all / empty_item: delete everything, or one item, for good
- auto_cleanup: delete items older than the retention window
- purge_corrupted: drop records whose payload has disappeared
- check_quota: compare occupied bytes with the configured maximum and
  optionally run auto_cleanup as a remedy

All mutating operations expect the caller to hold the bin lock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from recyclebin.core.bin.errors import (
    NotFoundError,
    PermissionDeniedError,
    StoreUnwritableError,
)
from recyclebin.core.config.models import BinConfig
from recyclebin.core.payload.area import PayloadArea
from recyclebin.core.records.models import Record
from recyclebin.core.records.store import RecordStore

logger = logging.getLogger(__name__)

# Confirmation callback: receives a prompt, returns True to proceed
Confirm = Callable[[str], bool]


@dataclass
class EmptyResult:
    """Outcome of an empty operation."""

    removed: list[Record] = field(default_factory=list)
    cancelled: bool = False
    already_empty: bool = False
    payload_missing: bool = False

    @property
    def count(self) -> int:
        return len(self.removed)

    @property
    def bytes_freed(self) -> int:
        return sum(r.size for r in self.removed)


@dataclass
class CleanupReport:
    """Outcome of a retention cleanup."""

    retention_days: int
    cutoff: datetime
    deleted: list[Record] = field(default_factory=list)
    bytes_freed: int = 0
    skipped_unparsable: list[Record] = field(default_factory=list)
    missing_payloads: list[Record] = field(default_factory=list)
    failed: list[Record] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)


@dataclass
class QuotaReport:
    """Occupied bytes compared with the configured maximum."""

    used_bytes: int
    max_bytes: int
    max_size_mb: int
    cleanup: CleanupReport | None = None

    @property
    def usage_percent(self) -> int:
        if self.max_bytes <= 0:
            return 100 if self.used_bytes else 0
        return (100 * self.used_bytes) // self.max_bytes

    @property
    def exceeded(self) -> bool:
        return self.used_bytes > self.max_bytes


class PurgeService:
    """
    Service for permanent removal and reconciliation.

    Example:
        >>> service = PurgeService(config, store, payloads)
        >>> report = service.auto_cleanup()
        >>> print(f"{report.deleted_count} items, {report.bytes_freed} bytes freed")
    """

    def __init__(
        self,
        config: BinConfig,
        store: RecordStore,
        payloads: PayloadArea,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.store = store
        self.payloads = payloads
        self._now = now

    # ------------------------------------------------------------------
    # Empty
    # ------------------------------------------------------------------

    def empty_all(self, confirm: Confirm | None = None) -> EmptyResult:
        """
        Delete every payload and reset the store to its header.

        Args:
            confirm: Asked before deleting; None skips the question

        Raises:
            PermissionDeniedError: If some payload cannot be deleted (records
                whose payload was already deleted are dropped first)
        """
        records = self.store.list_records()
        if not records and not self.payloads.entries():
            logger.info("Empty skipped: recycle bin already empty")
            return EmptyResult(already_empty=True)

        if confirm is not None and not confirm(
            f"This will permanently delete ALL {len(records)} items. Continue?"
        ):
            logger.info("Empty cancelled by user")
            return EmptyResult(cancelled=True)

        try:
            self.payloads.clear()
        except OSError as e:
            logger.error("Empty failed: could not delete some items: %s", e)
            gone = [r.id for r in records if not self.payloads.exists(r.id)]
            self.store.remove_many(gone)
            if gone:
                logger.info("Dropped %d records whose items were already deleted", len(gone))
            raise PermissionDeniedError(
                f"Could not delete some files, check permissions: {e}"
            ) from e

        self.store.reset()
        logger.info("Emptied recycle bin (%d items)", len(records))
        return EmptyResult(removed=records)

    def empty_item(self, record_id: str, confirm: Confirm | None = None) -> EmptyResult:
        """
        Permanently delete one item by exact ID.

        A missing payload is tolerated: the record is still removed and a
        warning is logged.

        Raises:
            NotFoundError: No record has this ID
            PermissionDeniedError: The payload exists but cannot be deleted
        """
        try:
            record = self.store.get(record_id)
        except NotFoundError as e:
            logger.error("Empty failed: %s", e)
            raise

        if confirm is not None and not confirm(
            f"This will permanently delete '{record.original_name}' ({record.id}). Continue?"
        ):
            logger.info("Empty cancelled by user for %s (%s)", record.original_name, record.id)
            return EmptyResult(cancelled=True)

        try:
            existed = self.payloads.discard(record.id)
        except OSError as e:
            logger.error(
                "Empty failed: permission denied deleting %s (%s): %s",
                record.original_name,
                record.id,
                e,
            )
            raise PermissionDeniedError(
                f"Failed to delete '{record.original_name}': {e}"
            ) from e

        self.store.remove(record.id)

        if existed:
            logger.info("Permanently deleted %s (%s)", record.original_name, record.id)
        else:
            logger.warning(
                "Missing data file for %s (%s); removed from metadata",
                record.original_name,
                record.id,
            )
        return EmptyResult(removed=[record], payload_missing=not existed)

    # ------------------------------------------------------------------
    # Retention cleanup
    # ------------------------------------------------------------------

    def auto_cleanup(self, now: datetime | None = None) -> CleanupReport:
        """
        Delete items whose deletion date is older than the retention window.

        Records whose deletion date cannot be parsed are never treated as
        expired. A missing payload still lets its record go; a payload that
        cannot be deleted keeps its record.
        """
        current = now or self._now()
        try:
            cutoff = current - timedelta(days=self.config.retention_days)
        except OverflowError:
            # A retention window reaching before year 1 expires nothing
            cutoff = datetime.min
        report = CleanupReport(retention_days=self.config.retention_days, cutoff=cutoff)

        expired_ids: list[str] = []
        for record in self.store.scan():
            deleted_at = record.deleted_at
            if deleted_at is None:
                logger.warning(
                    "Cleanup skipped %s (%s): unparsable deletion date %r",
                    record.original_name,
                    record.id,
                    record.deletion_date,
                )
                report.skipped_unparsable.append(record)
                continue
            if deleted_at >= cutoff:
                continue

            try:
                existed = self.payloads.discard(record.id)
            except OSError as e:
                logger.error(
                    "Cleanup failed: permission denied deleting %s (%s): %s",
                    record.original_name,
                    record.id,
                    e,
                )
                report.failed.append(record)
                continue

            if existed:
                report.deleted.append(record)
                report.bytes_freed += record.size
                logger.info(
                    "Cleanup removed %s (%s): older than %d days",
                    record.original_name,
                    record.id,
                    self.config.retention_days,
                )
            else:
                report.missing_payloads.append(record)
                logger.warning(
                    "Cleanup: missing data file for %s (%s)", record.original_name, record.id
                )
            expired_ids.append(record.id)

        try:
            self.store.remove_many(expired_ids)
        except StoreUnwritableError as e:
            logger.error(
                "Cleanup failed: %d expired records could not be removed: %s",
                len(expired_ids),
                e,
            )
            raise

        logger.info(
            "Cleanup summary: deleted=%d freed=%dB retention=%dd",
            report.deleted_count,
            report.bytes_freed,
            self.config.retention_days,
        )
        return report

    # ------------------------------------------------------------------
    # Corruption purge
    # ------------------------------------------------------------------

    def purge_corrupted(self) -> list[Record]:
        """
        Drop records whose payload no longer exists.

        Payloads without a record are left alone. Running this twice in a
        row removes nothing the second time.

        Returns:
            The records that were dropped
        """
        orphaned = [r for r in self.store.scan() if not self.payloads.exists(r.id)]

        try:
            self.store.remove_many(r.id for r in orphaned)
        except StoreUnwritableError as e:
            logger.error("Purge failed: %d corrupted entries were kept: %s", len(orphaned), e)
            raise

        for record in orphaned:
            logger.warning(
                "Purged corrupted entry %s (%s): payload missing", record.original_name, record.id
            )

        if orphaned:
            logger.info("Purged %d corrupted entries", len(orphaned))
        else:
            logger.info("No corrupted entries found")
        return orphaned

    # ------------------------------------------------------------------
    # Quota
    # ------------------------------------------------------------------

    def quota_status(self) -> QuotaReport:
        """Occupied bytes against the maximum, without changing anything."""
        return QuotaReport(
            used_bytes=self.store.total_size(),
            max_bytes=self.config.max_bytes,
            max_size_mb=self.config.max_size_mb,
        )

    def check_quota(self, auto_cleanup: bool = True) -> QuotaReport:
        """
        Report quota usage; when exceeded, warn and optionally run cleanup.

        Args:
            auto_cleanup: Run auto_cleanup if the quota is exceeded
        """
        report = self.quota_status()

        if not report.exceeded:
            logger.info(
                "Quota OK: %d%% used (%dB of %dMB)",
                report.usage_percent,
                report.used_bytes,
                report.max_size_mb,
            )
            return report

        logger.warning(
            "Quota exceeded: %d%% used (limit %dMB)", report.usage_percent, report.max_size_mb
        )
        if auto_cleanup:
            report.cleanup = self.auto_cleanup()
        return report
