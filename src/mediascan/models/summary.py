"""Aggregate models derived from a scan result."""

from typing import Dict, List

from pydantic import BaseModel, Field

from mediascan.models.core import Category, FileRecord


class ExtensionStat(BaseModel):
    """Count and cumulative size of the files sharing one extension."""

    extension: str
    count: int = 0
    size: int = 0


class ScanSummary(BaseModel):
    """Totals, per-category groupings and per-extension statistics.

    Computed by :func:`mediascan.core.aggregator.aggregate`; never persisted.
    """

    total_count: int = 0
    total_size: int = 0
    category_counts: Dict[Category, int] = Field(default_factory=dict)
    files_by_category: Dict[Category, List[FileRecord]] = Field(default_factory=dict)
    sorted_files: List[FileRecord] = Field(default_factory=list)
    """All records ordered by (category, name)."""
    extension_stats: List[ExtensionStat] = Field(default_factory=list)
    """Ordered by descending count, then extension."""

    def count_for(self: "ScanSummary", category: Category) -> int:
        """Return the number of files in *category* (0 when absent)."""
        return self.category_counts.get(category, 0)
