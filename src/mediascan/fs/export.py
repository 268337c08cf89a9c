"""CSV and JSON export of scan results.

Both exporters write one entry per classified file, ordered by
(category, name) like the text listing. Failures are raised as
ExportWriteError so the caller can report them and carry on with the other
export.

Columns / keys:
- CSV: Name, Type, Path, Directory, Extension, SizeFormatted, Created, Modified
  (timestamps as ``YYYY-MM-DD HH:MM:SS``)
- JSON: the same keys plus the raw byte count under Size (timestamps as
  ISO 8601 via DateTimeEncoder)
"""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from mediascan.core.aggregator import (
    format_name,
    format_size,
    format_timestamp,
    sort_records,
)
from mediascan.core.errors import ExportWriteError
from mediascan.models.core import Category, FileRecord, ScanResult
from mediascan.utils.json import DateTimeEncoder

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Name",
    "Type",
    "Path",
    "Directory",
    "Extension",
    "SizeFormatted",
    "Created",
    "Modified",
]

JSON_KEYS = [
    "Name",
    "Type",
    "Path",
    "Directory",
    "Extension",
    "Size",
    "SizeFormatted",
    "Created",
    "Modified",
]


def _category(record: FileRecord) -> Category:
    return record.category or Category.UNCLASSIFIED


def csv_row(record: FileRecord) -> Dict[str, str]:
    """Return the CSV row for *record*, keyed by CSV_COLUMNS."""
    return {
        "Name": format_name(record.name),
        "Type": _category(record).value,
        "Path": format_name(record.path),
        "Directory": format_name(record.directory),
        "Extension": format_name(record.extension),
        "SizeFormatted": format_size(record.size),
        "Created": format_timestamp(record.created),
        "Modified": format_timestamp(record.modified),
    }


def json_object(record: FileRecord) -> Dict[str, Any]:
    """Return the JSON object for *record*, keyed by JSON_KEYS."""
    return {
        "Name": format_name(record.name),
        "Type": _category(record),
        "Path": format_name(record.path),
        "Directory": format_name(record.directory),
        "Extension": format_name(record.extension),
        "Size": record.size,
        "SizeFormatted": format_size(record.size),
        "Created": record.created,
        "Modified": record.modified,
    }


def _prepare_destination(destination: Path) -> Path:
    destination = Path(destination).expanduser()
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportWriteError(destination, e) from e
    return destination


def export_csv(result: ScanResult, destination: Path) -> Path:
    """Write the classified files of *result* to a UTF-8 CSV file.

    Args:
        result: Scan result to export.
        destination: File to write; missing parent directories are created.

    Returns:
        The path written.

    Raises:
        ExportWriteError: If a row cannot be encoded or the file cannot be written.
    """
    destination = _prepare_destination(destination)
    rows = [csv_row(r) for r in sort_records(result.files)]
    buffer = io.StringIO(newline="")
    try:
        # Render in memory first so a failure leaves no truncated file behind.
        writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
        payload = buffer.getvalue().encode("utf-8")
    except (csv.Error, UnicodeError) as e:
        raise ExportWriteError(destination, e) from e
    try:
        destination.write_bytes(payload)
    except OSError as e:
        raise ExportWriteError(destination, e) from e
    logger.debug("Wrote %d rows to %s", len(rows), destination)
    return destination


def export_json(result: ScanResult, destination: Path) -> Path:
    """Write the classified files of *result* to a UTF-8 JSON array.

    Args:
        result: Scan result to export.
        destination: File to write; missing parent directories are created.

    Returns:
        The path written.

    Raises:
        ExportWriteError: If serialization or encoding fails, or the file cannot
            be written.
    """
    destination = _prepare_destination(destination)
    objects: List[Dict[str, Any]] = [json_object(r) for r in sort_records(result.files)]
    try:
        # Serialize before opening so a failure leaves no truncated file behind.
        payload = json.dumps(objects, cls=DateTimeEncoder, indent=2, ensure_ascii=False)
        data = (payload + "\n").encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ExportWriteError(destination, e) from e
    try:
        destination.write_bytes(data)
    except OSError as e:
        raise ExportWriteError(destination, e) from e
    logger.debug("Wrote %d objects to %s", len(objects), destination)
    return destination
