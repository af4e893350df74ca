"""Mini README: Map drones to flat snapshots and back.

Structure:
    * to_snapshot - project any drone onto a ``DroneSnapshot``.
    * to_drone - validate a snapshot and rebuild the concrete drone.

Dispatch is keyed on ``DroneKind`` through tables that are checked at import
time to cover every kind, so adding a kind without a builder fails fast.
Restoring cargo, photo counts and waypoints goes through the drones'
``apply_snapshot`` helpers, which skip the flight-state rules of live
operations. Battery and airborne state are applied last and are validated.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from ..common import OperationResult, ResultCode
from ..models import (
    DeliveryDrone,
    Drone,
    DroneKind,
    DroneSnapshot,
    RacingDrone,
    SurveyDrone,
    Waypoint,
)


def _waypoint_from(snapshot: DroneSnapshot) -> Optional[Waypoint]:
    if snapshot.waypoint_lat is None or snapshot.waypoint_lon is None:
        return None
    return Waypoint(snapshot.waypoint_lat, snapshot.waypoint_lon)


def _base_fields(drone: Drone) -> dict:
    return {
        "id": drone.id,
        "name": drone.name,
        "kind": drone.kind,
        "battery_percent": drone.battery_percent,
        "is_airborne": drone.is_airborne,
    }


def _delivery_snapshot(drone: Drone) -> DroneSnapshot:
    if not isinstance(drone, DeliveryDrone):
        raise TypeError(f"Expected a DeliveryDrone, got {type(drone).__name__}")
    waypoint = drone.current_waypoint
    return DroneSnapshot(
        **_base_fields(drone),
        load_kg=drone.current_load_kg,
        waypoint_lat=waypoint.latitude if waypoint else None,
        waypoint_lon=waypoint.longitude if waypoint else None,
    )


def _survey_snapshot(drone: Drone) -> DroneSnapshot:
    if not isinstance(drone, SurveyDrone):
        raise TypeError(f"Expected a SurveyDrone, got {type(drone).__name__}")
    waypoint = drone.current_waypoint
    return DroneSnapshot(
        **_base_fields(drone),
        waypoint_lat=waypoint.latitude if waypoint else None,
        waypoint_lon=waypoint.longitude if waypoint else None,
        photo_count=drone.photo_count,
    )


def _base_snapshot(drone: Drone) -> DroneSnapshot:
    return DroneSnapshot(**_base_fields(drone))


def _build_delivery(snapshot: DroneSnapshot) -> Drone:
    drone = DeliveryDrone(snapshot.id, snapshot.name)
    drone.apply_snapshot(snapshot.load_kg, _waypoint_from(snapshot))
    return drone


def _build_survey(snapshot: DroneSnapshot) -> Drone:
    drone = SurveyDrone(snapshot.id, snapshot.name)
    drone.apply_snapshot(snapshot.photo_count, _waypoint_from(snapshot))
    return drone


def _build_racing(snapshot: DroneSnapshot) -> Drone:
    return RacingDrone(snapshot.id, snapshot.name)


_SNAPSHOTTERS: Dict[DroneKind, Callable[[Drone], DroneSnapshot]] = {
    DroneKind.DELIVERY: _delivery_snapshot,
    DroneKind.SURVEY: _survey_snapshot,
    DroneKind.RACING: _base_snapshot,
}

_BUILDERS: Dict[DroneKind, Callable[[DroneSnapshot], Drone]] = {
    DroneKind.DELIVERY: _build_delivery,
    DroneKind.SURVEY: _build_survey,
    DroneKind.RACING: _build_racing,
}

if set(_SNAPSHOTTERS) != set(DroneKind) or set(_BUILDERS) != set(DroneKind):
    raise RuntimeError("Snapshot mapper tables must cover every DroneKind")


def to_snapshot(drone: Drone) -> DroneSnapshot:
    """Project ``drone`` onto its persisted fields."""

    if drone is None:
        raise TypeError("drone cannot be None")
    snapshotter = _SNAPSHOTTERS.get(getattr(drone, "kind", None), _base_snapshot)
    return snapshotter(drone)


def to_drone(snapshot: DroneSnapshot) -> OperationResult[Drone]:
    """Validate ``snapshot`` and rebuild the concrete drone it describes."""

    if snapshot is None:
        raise TypeError("snapshot cannot be None")
    if not snapshot.name or not snapshot.name.strip():
        return OperationResult.fail("Snapshot name cannot be empty.", ResultCode.VALIDATION)
    if not 0 <= snapshot.battery_percent <= 100:
        return OperationResult.fail("Battery percent must be between 0 and 100.", ResultCode.VALIDATION)

    builder = _BUILDERS.get(snapshot.kind)
    if builder is None:
        return OperationResult.fail(f"Unsupported drone kind '{snapshot.kind}'.", ResultCode.VALIDATION)

    drone = builder(snapshot)
    telemetry = drone.apply_telemetry(snapshot.battery_percent, snapshot.is_airborne)
    if not telemetry.success:
        return OperationResult.from_failure(telemetry, "Invalid telemetry.")
    return OperationResult.ok(drone)
