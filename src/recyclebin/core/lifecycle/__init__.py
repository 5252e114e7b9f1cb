"""
Capture (delete) and recall (restore): the two operations that move bytes
and change the record store together.
"""

from recyclebin.core.lifecycle.capture import CaptureFailure, CaptureReport, CaptureService
from recyclebin.core.lifecycle.recall import (
    ConflictDecision,
    ConflictResolver,
    FixedResolver,
    RecallResult,
    RecallService,
)

__all__ = [
    "CaptureFailure",
    "CaptureReport",
    "CaptureService",
    "ConflictDecision",
    "ConflictResolver",
    "FixedResolver",
    "RecallResult",
    "RecallService",
]
