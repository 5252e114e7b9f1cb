"""
Recycle bin record store.

Records describe captured items and live in metadata.db, one CSV row each.
"""

from recyclebin.core.records.models import DELETION_DATE_FORMAT, ItemKind, Record
from recyclebin.core.records.store import RecordStore

__all__ = [
    "DELETION_DATE_FORMAT",
    "ItemKind",
    "Record",
    "RecordStore",
]
