"""Mini README: Flat, serialisable drone snapshots.

Structure:
    * DroneSnapshot - Pydantic model used by the CSV and JSON boundaries.

Field aliases follow the PascalCase column names of the fleet file format
(``Id``, ``Name``, ``Kind`` ...). Snapshots never own a drone; they are
built on demand by the mapper and discarded after serialisation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator

from .drones import DroneKind

SNAPSHOT_COLUMNS = (
    "Id",
    "Name",
    "Kind",
    "BatteryPercent",
    "IsAirborne",
    "LoadKg",
    "WaypointLat",
    "WaypointLon",
    "PhotoCount",
)


class DroneSnapshot(BaseModel):
    """Persisted projection of a drone."""

    id: int = Field(..., alias="Id")
    name: str = Field(..., alias="Name")
    kind: DroneKind = Field(..., alias="Kind")
    battery_percent: float = Field(..., alias="BatteryPercent")
    is_airborne: bool = Field(False, alias="IsAirborne")
    load_kg: Optional[float] = Field(None, alias="LoadKg")
    waypoint_lat: Optional[float] = Field(None, alias="WaypointLat")
    waypoint_lon: Optional[float] = Field(None, alias="WaypointLon")
    photo_count: Optional[int] = Field(None, alias="PhotoCount")

    class Config:
        populate_by_name = True
        frozen = True

    @validator("kind", pre=True)
    def _coerce_kind(cls, value: Any) -> Any:
        """Accept kind names in any case and the enum ordinal used by older exports."""

        if isinstance(value, DroneKind):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            kinds = list(DroneKind)
            if 0 <= value < len(kinds):
                return kinds[value]
            raise ValueError(f"Unknown drone kind ordinal: {value}")
        parsed = DroneKind.parse(value) if isinstance(value, str) else None
        if parsed is None:
            raise ValueError(f"Unknown drone kind: {value}")
        return parsed

    def to_record(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping keyed by the file-format column names."""

        return self.model_dump(mode="json", by_alias=True)
