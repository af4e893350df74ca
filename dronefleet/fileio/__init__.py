"""Mini README: File format helpers for fleet import and export.

Structure:
    * csv_format - tokenising and formatting single CSV lines.
    * csv_parser - validating CSV columns into ``DroneSnapshot`` objects.
    * paths - candidate-root search used to resolve relative file paths.
"""

from .csv_format import CSV_HEADER, format_snapshot_row, tokenize_csv_line
from .csv_parser import DroneCsvParser
from .paths import candidate_roots, resolve_destination_path, resolve_existing_path

__all__ = [
    "CSV_HEADER",
    "DroneCsvParser",
    "candidate_roots",
    "format_snapshot_row",
    "resolve_destination_path",
    "resolve_existing_path",
    "tokenize_csv_line",
]
