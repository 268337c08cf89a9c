"""Filesystem output for mediascan (report exports)."""

from mediascan.fs.export import export_csv, export_json

__all__ = ["export_csv", "export_json"]
