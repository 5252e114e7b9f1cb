"""
Permanent removal: empty, retention cleanup, corruption purge and quota.
"""

from recyclebin.core.purge.service import (
    CleanupReport,
    Confirm,
    EmptyResult,
    PurgeService,
    QuotaReport,
)

__all__ = [
    "CleanupReport",
    "Confirm",
    "EmptyResult",
    "PurgeService",
    "QuotaReport",
]
