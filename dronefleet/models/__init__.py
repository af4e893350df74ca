"""Mini README: Domain models for the DroneFleet simulator.

Re-exports the drone entities, the serialisable ``DroneSnapshot`` and the
records produced by bulk imports so callers can import from a single place.
"""

from .drones import (
    DeliveryDrone,
    Drone,
    DroneKind,
    RacingDrone,
    SurveyDrone,
    Waypoint,
    round_half_up,
)
from .import_result import FileImportSummary, FleetImportResult, ImportIssue, MAX_ROW_COUNT
from .snapshot import SNAPSHOT_COLUMNS, DroneSnapshot

__all__ = [
    "DeliveryDrone",
    "Drone",
    "DroneKind",
    "DroneSnapshot",
    "FileImportSummary",
    "FleetImportResult",
    "ImportIssue",
    "MAX_ROW_COUNT",
    "RacingDrone",
    "SNAPSHOT_COLUMNS",
    "SurveyDrone",
    "Waypoint",
    "round_half_up",
]
