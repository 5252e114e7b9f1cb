"""
Typed exceptions for recycle bin operations.

Every failure a core operation can surface maps to one of these classes so
the CLI (or any other interface) can turn it into a user-facing message and
an exit code without inspecting message text.
"""

from __future__ import annotations


class RecycleBinError(Exception):
    """Base exception for recycle bin errors."""


class NotFoundError(RecycleBinError):
    """An item, record or argument that was required does not exist."""


class ForbiddenError(RecycleBinError):
    """The operation would make the bin capture itself."""


class PermissionDeniedError(RecycleBinError):
    """The caller lacks the permissions needed on an item."""


class QuotaExceededError(RecycleBinError):
    """Capturing the item would push the bin above its size limit."""

    def __init__(self, path: str, size: int, occupied: int, max_bytes: int) -> None:
        self.path = path
        self.size = size
        self.occupied = occupied
        self.max_bytes = max_bytes
        super().__init__(
            f"Recycle Bin limit exceeded: '{path}' needs {size} bytes, "
            f"{occupied} of {max_bytes} bytes already used"
        )


class InsufficientSpaceError(RecycleBinError):
    """The target filesystem does not have room for the item."""

    def __init__(self, path: str, needed: int, available: int) -> None:
        self.path = path
        self.needed = needed
        self.available = available
        super().__init__(
            f"Not enough space for '{path}': need {needed} bytes, {available} available"
        )


class PayloadMissingError(RecycleBinError):
    """A record exists but its payload is gone (orphaned record)."""

    def __init__(self, record_id: str, name: str) -> None:
        self.record_id = record_id
        self.name = name
        super().__init__(f"Recycled data missing for '{name}' ({record_id})")


class DestinationUnwritableError(RecycleBinError):
    """The restore destination cannot be created or written."""


class BinBusyError(RecycleBinError):
    """Another invocation holds the bin lock."""


class MalformedConfigError(RecycleBinError):
    """A configuration line could not be understood."""

    def __init__(self, line_num: int, line: str, reason: str) -> None:
        self.line_num = line_num
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_num}: {reason} ({line!r})")


class StoreUnwritableError(RecycleBinError):
    """The record store could not be written."""


class RelocationError(RecycleBinError):
    """Moving the payload failed after its record was written."""


__all__ = [
    "BinBusyError",
    "DestinationUnwritableError",
    "ForbiddenError",
    "InsufficientSpaceError",
    "MalformedConfigError",
    "NotFoundError",
    "PayloadMissingError",
    "PermissionDeniedError",
    "QuotaExceededError",
    "RecycleBinError",
    "RelocationError",
    "StoreUnwritableError",
]
