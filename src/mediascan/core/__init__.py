"""Core functionality for mediascan: registry, scanner, classifier, aggregator."""

from mediascan.core.aggregator import aggregate, format_name, format_size
from mediascan.core.classifier import classify
from mediascan.core.errors import (
    EntryAccessError,
    ExportWriteError,
    MediaScanError,
    PathNotFoundError,
)
from mediascan.core.registry import CategoryRegistry, default_registry
from mediascan.core.scanner import iter_entries, scan_directory

__all__ = [
    "CategoryRegistry",
    "EntryAccessError",
    "ExportWriteError",
    "MediaScanError",
    "PathNotFoundError",
    "aggregate",
    "classify",
    "default_registry",
    "format_name",
    "format_size",
    "iter_entries",
    "scan_directory",
]
