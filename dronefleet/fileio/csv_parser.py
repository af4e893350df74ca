"""Mini README: Validate tokenised CSV rows into drone snapshots.

Structure:
    * DroneCsvParser - turns one list of columns into a ``DroneSnapshot``.

Required columns (id, name, kind, battery, airborne flag) fail the row with
a precise reason. The optional numeric columns are lenient: blank or
unparsable values become ``None`` so a stray character in, say, the photo
count does not reject an otherwise valid drone.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..common import OperationResult, ResultCode
from ..models import DroneKind, DroneSnapshot

EXPECTED_COLUMNS = 9

_TRUE_VALUES = {"true", "1", "yes", "y"}
_FALSE_VALUES = {"false", "0", "no", "n"}


def _plain_number(value: str) -> Optional[str]:
    # ASCII only, no digit-group underscores.
    text = value.strip()
    if not text.isascii() or "_" in text:
        return None
    return text


def _parse_int(value: str) -> Optional[int]:
    text = _plain_number(value)
    if text is None:
        return None
    try:
        return int(text)
    except (TypeError, ValueError):
        return None


def _parse_float(value: str) -> Optional[float]:
    text = _plain_number(value)
    if text is None:
        return None
    try:
        return float(text)
    except (TypeError, ValueError):
        return None


def _parse_bool(value: str) -> Optional[bool]:
    normalised = value.strip().lower()
    if normalised in _TRUE_VALUES:
        return True
    if normalised in _FALSE_VALUES:
        return False
    return None


def _optional_float(value: str) -> Optional[float]:
    if not value or not value.strip():
        return None
    parsed = _parse_float(value)
    if parsed is None or not math.isfinite(parsed):
        return None
    return parsed


def _optional_int(value: str) -> Optional[int]:
    if not value or not value.strip():
        return None
    return _parse_int(value)


class DroneCsvParser:
    """Parse CSV columns into validated snapshots."""

    def parse(self, columns: Sequence[str]) -> OperationResult[DroneSnapshot]:
        if len(columns) < EXPECTED_COLUMNS:
            return OperationResult.fail(
                "Row does not contain the expected number of columns.", ResultCode.VALIDATION
            )

        drone_id = _parse_int(columns[0])
        if drone_id is None:
            return OperationResult.fail("Invalid Id value.", ResultCode.VALIDATION)

        name = columns[1].strip()
        if not name:
            return OperationResult.fail("Name cannot be empty.", ResultCode.VALIDATION)

        kind = DroneKind.parse(columns[2])
        if kind is None:
            return OperationResult.fail("Unknown drone type.", ResultCode.VALIDATION)

        battery = _parse_float(columns[3])
        if battery is None:
            return OperationResult.fail("Invalid battery percent.", ResultCode.VALIDATION)

        is_airborne = _parse_bool(columns[4])
        if is_airborne is None:
            return OperationResult.fail("Invalid airborne flag.", ResultCode.VALIDATION)

        snapshot = DroneSnapshot(
            id=drone_id,
            name=name,
            kind=kind,
            battery_percent=battery,
            is_airborne=is_airborne,
            load_kg=_optional_float(columns[5]),
            waypoint_lat=_optional_float(columns[6]),
            waypoint_lon=_optional_float(columns[7]),
            photo_count=_optional_int(columns[8]),
        )
        return OperationResult.ok(snapshot)
