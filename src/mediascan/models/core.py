"""Core domain models for mediascan.

This module defines the foundational data structures for media file scanning,
classification, and reporting.
- Used throughout mediascan for representing discovered files, skipped
  entries, and scan results.
- Ensures all file paths are absolute so exported reports are unambiguous.

Design:
- Category and MediaFilter enums provide a closed, type-safe vocabulary for
  classification and for selecting what to scan.
- FileRecord encapsulates the metadata reported for one file. It is frozen;
  classification returns an updated copy.
- ScanResult carries the classified records, the traversal diagnostics, and
  the parameters the scan was requested with.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Category(str, Enum):
    """Media category a file is classified into.

    ``UNCLASSIFIED`` is assigned when no category claims the extension.
    """

    AUDIO = "Audio"
    VIDEO = "Video"
    PICTURE = "Picture"
    VAULT = "Vault"
    UNCLASSIFIED = "Unclassified"

    @classmethod
    def real(cls) -> List["Category"]:
        """Return every category that owns extensions (all but UNCLASSIFIED)."""
        return [c for c in cls if c is not cls.UNCLASSIFIED]


class MediaFilter(str, Enum):
    """Media type requested for a scan.

    Each variant maps to the categories whose extensions are scanned for.
    """

    AUDIO = "Audio"
    VIDEO = "Video"
    PICTURE = "Picture"
    VAULT = "Vault"
    ALL = "All"

    def categories(self: "MediaFilter") -> FrozenSet[Category]:
        """Return the categories selected by this filter."""
        return _FILTER_CATEGORIES[self]

    def includes(self: "MediaFilter", category: Category) -> bool:
        """Return True if *category* is selected by this filter."""
        return category in _FILTER_CATEGORIES[self]


_FILTER_CATEGORIES = {
    MediaFilter.AUDIO: frozenset({Category.AUDIO}),
    MediaFilter.VIDEO: frozenset({Category.VIDEO}),
    MediaFilter.PICTURE: frozenset({Category.PICTURE}),
    MediaFilter.VAULT: frozenset({Category.VAULT}),
    MediaFilter.ALL: frozenset(Category.real()),
}

# Every filter must be mapped; a new variant without a mapping fails at import.
if set(_FILTER_CATEGORIES) != set(MediaFilter):
    raise RuntimeError("Every MediaFilter variant needs a category mapping")


class FileRecord(BaseModel):
    """Represents a file discovered during scanning.

    Created by the scanner from filesystem metadata and enriched with a
    category by the classifier. Read-only thereafter.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    """File name including extension."""

    path: Path
    """Absolute path to the file."""

    directory: Path
    """Absolute path of the parent directory."""

    extension: str = ""
    """Lowercase extension including the leading dot, or empty."""

    size: int = Field(ge=0)
    """Size of the file in bytes."""

    created: datetime
    """Creation time as reported by the filesystem."""

    modified: datetime
    """Last modification time."""

    category: Optional[Category] = None
    """Assigned by the classifier; None until classified."""

    @model_validator(mode="after")
    def validate_paths(self: "FileRecord") -> "FileRecord":
        """Ensure the paths are absolute and the extension is normalised.

        Raises:
            ValueError: If a path is relative or the extension is not lowercase.
        """
        if not self.path.is_absolute():
            raise ValueError(f"Path must be absolute: {self.path}")
        if not self.directory.is_absolute():
            raise ValueError(f"Directory must be absolute: {self.directory}")
        if self.extension != self.extension.lower():
            raise ValueError(f"Extension must be lowercase: {self.extension}")
        return self

    @property
    def is_classified(self: "FileRecord") -> bool:
        """Whether the classifier has assigned a category."""
        return self.category is not None


class SkippedEntry(BaseModel):
    """A traversal step that could not be read and was skipped."""

    model_config = ConfigDict(frozen=True)

    path: Path
    reason: str


class ScanResult(BaseModel):
    """Result of a media scan operation.

    Owned by the run that produced it and consumed by the aggregator and the
    reporters. Skipped entries are kept in ``diagnostics`` and never appear in
    ``files``.
    """

    files: List[FileRecord]
    """Classified records in traversal order."""

    root: Path
    """Absolute root directory of the scan."""

    media_filter: MediaFilter = MediaFilter.ALL
    """Media type the scan was requested for."""

    recursive: bool = True
    """Whether subdirectories were scanned."""

    include_hidden: bool = False
    """Whether dot-prefixed entries were scanned."""

    duration_seconds: float = 0.0
    """Elapsed wall time of the traversal."""

    scan_time: datetime = Field(default_factory=datetime.now)
    """When the scan was run."""

    diagnostics: List[SkippedEntry] = Field(default_factory=list)
    """Entries skipped because they could not be accessed."""
