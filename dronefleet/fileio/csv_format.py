"""Mini README: Single-line CSV tokenising and formatting.

Structure:
    * tokenize_csv_line - split one line honouring RFC 4180 quoting.
    * format_snapshot_row - render a snapshot as one CSV line.
    * CSV_HEADER - the header written on export.

Both directions use the standard ``csv`` module so embedded commas and
doubled quotes are handled consistently. Numbers are written with ``repr``
so values survive a round trip without locale or precision loss.
"""

from __future__ import annotations

import csv
import io
from typing import List, Optional

from ..models import SNAPSHOT_COLUMNS, DroneSnapshot

CSV_HEADER = ",".join(SNAPSHOT_COLUMNS)


def tokenize_csv_line(line: str) -> List[str]:
    """Split ``line`` into trimmed column values."""

    if line is None:
        raise TypeError("line cannot be None")
    reader = csv.reader([line], skipinitialspace=True)
    try:
        columns = next(reader)
    except StopIteration:
        return [""]
    return [column.strip() for column in columns]


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def format_snapshot_row(snapshot: DroneSnapshot) -> str:
    """Render ``snapshot`` as a CSV line without the trailing newline."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="")
    writer.writerow(
        [
            snapshot.id,
            snapshot.name,
            snapshot.kind.value,
            _format_number(snapshot.battery_percent),
            "true" if snapshot.is_airborne else "false",
            _format_number(snapshot.load_kg),
            _format_number(snapshot.waypoint_lat),
            _format_number(snapshot.waypoint_lon),
            "" if snapshot.photo_count is None else str(snapshot.photo_count),
        ]
    )
    return buffer.getvalue()
