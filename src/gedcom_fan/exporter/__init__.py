"""
Exporter package.

Re-exports the JSON export entry points used by the CLI.
"""

from __future__ import annotations

from .json_exporter import build_export_dict, export_to_json, serialize_to_json_string

__all__ = ["build_export_dict", "export_to_json", "serialize_to_json_string"]
