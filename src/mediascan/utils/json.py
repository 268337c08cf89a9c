"""JSON serialization helpers for mediascan.

This module provides helpers for serializing report rows to JSON, especially
for types not natively supported by the standard library.
- datetime objects are written in ISO 8601 format.
- Path objects are written as strings.
- Enum members (e.g. Category) are written as their value.
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder for datetime, Path and Enum values found in reports."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize

        Returns:
            JSON-serializable representation of the object.
            - datetime: ISO 8601 string
            - Path: string
            - Enum: its value
            - Otherwise: falls back to base class (raises TypeError)
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)
