"""
Record store backed by metadata.db.

The store is a CSV table whose header row is always present:

    ID,ORIGINAL_NAME,ORIGINAL_PATH,DELETION_DATE,FILE_SIZE,FILE_TYPE,PERMISSIONS,OWNER

Rows are written with the csv module, so a field containing a comma, quote
or newline is quoted instead of corrupting the row. Rows without such
characters look exactly like a plain comma-joined line.

Appends go straight to the end of the file. Every rewrite (remove, reset)
writes a temporary file in the bin directory and atomically renames it over
metadata.db, so an interrupted rewrite leaves either the old or the new
table, never a partial one.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, TextIO

from recyclebin.core.bin.errors import NotFoundError, StoreUnwritableError
from recyclebin.core.bin.layout import METADATA_HEADER
from recyclebin.core.records.models import Record

logger = logging.getLogger(__name__)


def _writer(f: TextIO) -> Any:
    return csv.writer(f, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)


class RecordStore:
    """
    Durable table of captured-item metadata.

    Example:
        >>> store = RecordStore(Path("~/.recycle_bin/metadata.db").expanduser())
        >>> store.initialize()
        >>> store.append(record)
        >>> store.find_by("notes.txt").id
        '1730300000000000000_4242'
        >>> store.remove(record.id)
    """

    def __init__(self, metadata_file: Path):
        self.metadata_file = Path(metadata_file)

    def initialize(self) -> None:
        """Create the table with only its header if it is missing or empty."""
        if self.metadata_file.exists() and self.metadata_file.stat().st_size > 0:
            return
        self._rewrite([])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _read_rows(self) -> list[list[str]]:
        """Data rows (header excluded) exactly as parsed, blank lines dropped."""
        if not self.metadata_file.exists():
            return []
        with open(self.metadata_file, encoding="utf-8", newline="") as f:
            rows = [row for row in csv.reader(f) if row]
        return rows[1:]

    def scan(self) -> Iterator[Record]:
        """
        Yield every record in file order.

        Malformed rows are skipped with a warning; they stay in the file
        untouched.
        """
        for line_num, row in enumerate(self._read_rows(), start=2):
            try:
                yield Record.from_row(row)
            except ValueError as e:
                logger.warning(
                    "Skipping malformed row %d in %s: %s", line_num, self.metadata_file, e
                )

    def list_records(self) -> list[Record]:
        return list(self.scan())

    def is_empty(self) -> bool:
        return not self._read_rows()

    def total_size(self) -> int:
        """Occupied bytes: the sum of recorded sizes."""
        return sum(record.size for record in self.scan())

    def get(self, record_id: str) -> Record:
        """
        Look up a record by exact ID.

        Raises:
            NotFoundError: If no record has this ID
        """
        for record in self.scan():
            if record.id == record_id:
                return record
        raise NotFoundError(f"Item ID '{record_id}' not found")

    def find_by(self, id_or_name: str) -> Record:
        """
        Look up a record by ID, falling back to original name.

        An exact ID match always wins over a name match; among name matches
        the first row in file order is returned.

        Raises:
            NotFoundError: If neither an ID nor a name matches
        """
        records = self.list_records()
        for record in records:
            if record.id == id_or_name:
                return record
        for record in records:
            if record.original_name == id_or_name:
                return record
        raise NotFoundError(f"Item not found in recycle bin: {id_or_name}")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, record: Record) -> None:
        """
        Add one row to the end of the table.

        Raises:
            StoreUnwritableError: If metadata.db cannot be written
        """
        try:
            if not self.metadata_file.exists() or self.metadata_file.stat().st_size == 0:
                self._rewrite([])
            with open(self.metadata_file, "a", encoding="utf-8", newline="") as f:
                _writer(f).writerow(record.to_row())
        except OSError as e:
            raise StoreUnwritableError(f"Cannot write {self.metadata_file}: {e}") from e

    def remove(self, record_id: str) -> None:
        """
        Drop the row for ``record_id``, keeping every other row as it is.

        Raises:
            NotFoundError: If no row has this ID
            StoreUnwritableError: If the rewrite fails
        """
        if self.remove_many([record_id]) == 0:
            raise NotFoundError(f"Item ID '{record_id}' not found")

    def remove_many(self, record_ids: Iterable[str]) -> int:
        """
        Drop the rows for every listed ID in a single rewrite.

        Returns:
            Number of rows removed (0 leaves the file untouched)

        Raises:
            StoreUnwritableError: If the rewrite fails
        """
        targets = set(record_ids)
        if not targets:
            return 0

        rows = self._read_rows()
        kept = [row for row in rows if row[0] not in targets]
        removed = len(rows) - len(kept)
        if removed:
            self._rewrite(kept)
        return removed

    def reset(self) -> None:
        """Rewrite the table to header-only."""
        self._rewrite([])

    def _rewrite(self, rows: list[list[str]]) -> None:
        """
        Replace metadata.db atomically with the header plus ``rows``.

        Raises:
            StoreUnwritableError: If the temporary file cannot be written or renamed
        """
        directory = self.metadata_file.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=directory, prefix=".metadata_", suffix=".db.tmp"
            )
        except OSError as e:
            raise StoreUnwritableError(f"Cannot write {self.metadata_file}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                writer = _writer(f)
                writer.writerow(METADATA_HEADER)
                writer.writerows(rows)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, self.metadata_file)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StoreUnwritableError(f"Cannot rewrite {self.metadata_file}: {e}") from e
