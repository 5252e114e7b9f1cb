"""
Recycle bin plumbing: on-disk layout, typed errors, locking and logging.
"""

from recyclebin.core.bin.errors import (
    BinBusyError,
    DestinationUnwritableError,
    ForbiddenError,
    InsufficientSpaceError,
    MalformedConfigError,
    NotFoundError,
    PayloadMissingError,
    PermissionDeniedError,
    QuotaExceededError,
    RecycleBinError,
    RelocationError,
    StoreUnwritableError,
)
from recyclebin.core.bin.layout import METADATA_HEADER, BinLayout, default_bin_root
from recyclebin.core.bin.lock import BinLock

__all__ = [
    "BinBusyError",
    "BinLayout",
    "BinLock",
    "DestinationUnwritableError",
    "ForbiddenError",
    "InsufficientSpaceError",
    "METADATA_HEADER",
    "MalformedConfigError",
    "NotFoundError",
    "PayloadMissingError",
    "PermissionDeniedError",
    "QuotaExceededError",
    "RecycleBinError",
    "RelocationError",
    "StoreUnwritableError",
    "default_bin_root",
]
