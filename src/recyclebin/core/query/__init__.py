"""
Read-only queries: list, search, statistics and preview.
"""

from recyclebin.core.query.preview import DEFAULT_PREVIEW_LINES, Preview, preview
from recyclebin.core.query.service import (
    BinStats,
    KindStats,
    Listing,
    SearchResult,
    compute_stats,
    format_size,
    list_records,
    matches_pattern,
    search,
)

__all__ = [
    "BinStats",
    "DEFAULT_PREVIEW_LINES",
    "KindStats",
    "Listing",
    "Preview",
    "SearchResult",
    "compute_stats",
    "format_size",
    "list_records",
    "matches_pattern",
    "preview",
    "search",
]
