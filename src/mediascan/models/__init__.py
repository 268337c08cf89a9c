"""Domain models for the mediascan application."""

from mediascan.models.core import (
    Category,
    FileRecord,
    MediaFilter,
    ScanResult,
    SkippedEntry,
)
from mediascan.models.scan import ScanOptions
from mediascan.models.summary import ExtensionStat, ScanSummary

__all__ = [
    "Category",
    "ExtensionStat",
    "FileRecord",
    "MediaFilter",
    "ScanOptions",
    "ScanResult",
    "ScanSummary",
    "SkippedEntry",
]
