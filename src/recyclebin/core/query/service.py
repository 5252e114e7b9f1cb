"""
Read-only queries over the record store: listing, search and statistics.

None of these take the bin lock. A query running next to a writer may see
the store just before or just after a change, never a half-written file.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from datetime import datetime

from recyclebin.core.config.models import BinConfig
from recyclebin.core.records.models import ItemKind, Record
from recyclebin.core.records.store import RecordStore

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
_WILDCARD_CHARS = frozenset("*?[")


def format_size(size: int) -> str:
    """
    Human-readable size, truncating at each step.

    Example:
        >>> format_size(1536)
        '1KB'
        >>> format_size(5 * 1024**5)
        '5120TB'
    """
    value = size
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value //= 1024
        unit += 1
    return f"{value}{SIZE_UNITS[unit]}"


@dataclass
class Listing:
    """Every record plus aggregate totals."""

    records: list[Record] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.records)

    @property
    def total_bytes(self) -> int:
        return sum(r.size for r in self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records


@dataclass
class SearchResult:
    """Records matching a search pattern."""

    pattern: str
    ignore_case: bool
    matches: list[Record] = field(default_factory=list)

    @property
    def total_matches(self) -> int:
        return len(self.matches)

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)


def list_records(store: RecordStore) -> Listing:
    """Snapshot of the whole store in file order."""
    return Listing(records=store.list_records())


def is_wildcard(pattern: str) -> bool:
    return any(ch in _WILDCARD_CHARS for ch in pattern)


def matches_pattern(value: str, pattern: str, ignore_case: bool = False) -> bool:
    """
    Match ``value`` against a shell wildcard or a literal.

    Wildcard patterns (containing ``*``, ``?`` or ``[``) must match the whole
    value; literal patterns match anywhere inside it.
    """
    if ignore_case:
        value = value.lower()
        pattern = pattern.lower()
    if is_wildcard(pattern):
        return fnmatch.fnmatchcase(value, pattern)
    return pattern in value


def search(store: RecordStore, pattern: str, ignore_case: bool = False) -> SearchResult:
    """
    Find records whose original name or original path matches ``pattern``.

    Example:
        >>> search(store, "*.txt").total_matches
        2
        >>> search(store, "REPORT", ignore_case=True).has_matches
        True
    """
    if not pattern:
        raise ValueError("Search pattern must not be empty")

    result = SearchResult(pattern=pattern, ignore_case=ignore_case)
    for record in store.scan():
        if matches_pattern(record.original_name, pattern, ignore_case) or matches_pattern(
            record.original_path, pattern, ignore_case
        ):
            result.matches.append(record)
    return result


@dataclass
class KindStats:
    count: int = 0
    bytes: int = 0


@dataclass
class BinStats:
    """Aggregate statistics for the stats command."""

    total_items: int
    total_bytes: int
    max_bytes: int
    by_kind: dict[ItemKind, KindStats]
    oldest: Record | None
    newest: Record | None

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0

    @property
    def average_bytes(self) -> int:
        if not self.total_items:
            return 0
        return self.total_bytes // self.total_items

    @property
    def usage_percent(self) -> int:
        if self.max_bytes <= 0:
            return 100 if self.total_bytes else 0
        return (100 * self.total_bytes) // self.max_bytes


def compute_stats(store: RecordStore, config: BinConfig) -> BinStats:
    """
    Summarize the store: counts and sizes per kind, age range and quota use.

    Records with unparsable deletion dates are counted but take no part in
    the oldest/newest calculation.
    """
    records = store.list_records()
    by_kind = {kind: KindStats() for kind in ItemKind}
    for record in records:
        stats = by_kind[record.kind]
        stats.count += 1
        stats.bytes += record.size

    dated = sorted(
        (r for r in records if r.deleted_at is not None),
        key=lambda r: r.deleted_at or datetime.min,
    )

    return BinStats(
        total_items=len(records),
        total_bytes=sum(r.size for r in records),
        max_bytes=config.max_bytes,
        by_kind=by_kind,
        oldest=dated[0] if dated else None,
        newest=dated[-1] if dated else None,
    )
