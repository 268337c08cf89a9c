"""Utility modules for mediascan."""

from mediascan.utils.config import (
    load_category_overrides,
    resolve_setting,
    set_setting,
)
from mediascan.utils.json import DateTimeEncoder

__all__ = [
    "DateTimeEncoder",
    "load_category_overrides",
    "resolve_setting",
    "set_setting",
]
