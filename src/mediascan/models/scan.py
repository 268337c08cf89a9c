"""Scan options and related models.

This module defines the resolved options of one mediascan run.
- Built by the CLI after merging command-line flags, environment variables
  and the config file (see :mod:`mediascan.utils.config`).
- Keeps all run parameters explicit so the scan and its reports are
  reproducible.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mediascan.models.core import MediaFilter


class ScanOptions(BaseModel):
    """Options for one scan-and-report run."""

    root: Path
    """Root directory to scan."""

    media_filter: MediaFilter = MediaFilter.ALL
    """Media type to scan for."""

    recursive: bool = True
    """Whether to scan subdirectories (default True)."""

    include_hidden: bool = False
    """Whether to include dot-prefixed files and directories."""

    list_files: bool = True
    """Print a one-line-per-file listing after the summary."""

    show_details: bool = False
    """Print the multi-line per-file detail listing instead."""

    export_csv: Optional[Path] = None
    """Destination of the CSV export; None disables it."""

    export_json: Optional[Path] = None
    """Destination of the JSON export; None disables it."""

    model_config = ConfigDict(frozen=True)
