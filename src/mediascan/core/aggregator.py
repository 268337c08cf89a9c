"""Aggregation of classified records into report-ready totals.

All functions here are pure: they read records and return new objects.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from mediascan.models.core import Category, FileRecord
from mediascan.models.summary import ExtensionStat, ScanSummary

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_size(size: int) -> str:
    """Format a byte count using the largest fitting 1024-based unit.

    Args:
        size: Number of bytes.

    Returns:
        ``"N bytes"`` below 1 KB, otherwise the value in KB, MB or GB with two
        decimal places, e.g. ``"1.50 KB"``.

    Raises:
        ValueError: If *size* is negative.
    """
    if size < 0:
        raise ValueError(f"Size cannot be negative: {size}")
    if size >= GB:
        return f"{size / GB:.2f} GB"
    if size >= MB:
        return f"{size / MB:.2f} MB"
    if size >= KB:
        return f"{size / KB:.2f} KB"
    return f"{size} bytes"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ``YYYY-MM-DD HH:MM:SS``."""
    return value.strftime(TIMESTAMP_FORMAT)


def format_name(value: object) -> str:
    """Return a file name or path as text that always encodes as UTF-8.

    Names that are not valid UTF-8 on disk come back from the OS with
    surrogate escapes; those bytes are shown as U+FFFD.
    """
    return str(value).encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _sort_key(record: FileRecord) -> Tuple[str, str]:
    category = record.category or Category.UNCLASSIFIED
    return category.value, record.name


def sort_records(records: Iterable[FileRecord]) -> List[FileRecord]:
    """Return *records* ordered by (category, name) using ordinal comparison."""
    return sorted(records, key=_sort_key)


def extension_stats(records: Iterable[FileRecord]) -> List[ExtensionStat]:
    """Group records by extension and sum their counts and sizes.

    Returns:
        Stats ordered by descending count, ties broken by extension ascending.
    """
    stats: Dict[str, ExtensionStat] = {}
    for record in records:
        ext = record.extension.lower()
        stat = stats.get(ext)
        if stat is None:
            stat = stats[ext] = ExtensionStat(extension=ext)
        stat.count += 1
        stat.size += record.size
    return sorted(stats.values(), key=lambda s: (-s.count, s.extension))


def aggregate(records: Iterable[FileRecord]) -> ScanSummary:
    """Build totals, per-category groupings and extension statistics.

    Args:
        records: Classified records, usually ``ScanResult.files``.

    Returns:
        ScanSummary whose category counts include every real category (0 when
        no file matched). UNCLASSIFIED only appears when a record carries it.
    """
    ordered = sort_records(records)

    files_by_category: Dict[Category, List[FileRecord]] = {c: [] for c in Category.real()}
    total_size = 0
    for record in ordered:
        category = record.category or Category.UNCLASSIFIED
        files_by_category.setdefault(category, []).append(record)
        total_size += record.size

    return ScanSummary(
        total_count=len(ordered),
        total_size=total_size,
        category_counts={c: len(files) for c, files in files_by_category.items()},
        files_by_category=files_by_category,
        sorted_files=ordered,
        extension_stats=extension_stats(ordered),
    )
