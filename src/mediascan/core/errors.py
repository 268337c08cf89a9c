"""Exceptions raised by the mediascan pipeline.

- PathNotFoundError is fatal: the scan root is missing or unreadable.
- EntryAccessError is per-entry: the scanner converts it into a SkippedEntry
  and continues with sibling entries.
- ExportWriteError is per-export: the CLI reports it and carries on with the
  remaining exports.
"""

from pathlib import Path


class MediaScanError(Exception):
    """Base class for all mediascan errors."""


class PathNotFoundError(MediaScanError, FileNotFoundError):
    """The scan root does not exist or is not an accessible directory."""

    def __init__(self, path: Path, reason: str = "Directory does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class EntryAccessError(MediaScanError, OSError):
    """A single file or directory could not be read during traversal."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Error accessing {path}: {cause}")


class ExportWriteError(MediaScanError):
    """A CSV or JSON report could not be written."""

    def __init__(self, destination: Path, cause: BaseException) -> None:
        self.destination = destination
        self.cause = cause
        super().__init__(f"Failed to write {destination}: {cause}")
