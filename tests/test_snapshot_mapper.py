"""Mini README: Tests for snapshot projection and drone reconstruction.

The mapper must reproduce every persisted field for each drone kind and
restore stored state without replaying flight rules.
"""

from __future__ import annotations

import pytest

from dronefleet.common import ResultCode
from dronefleet.mapping import to_drone, to_snapshot
from dronefleet.mapping.snapshot_mapper import _delivery_snapshot, _survey_snapshot
from dronefleet.models import DeliveryDrone, DroneKind, DroneSnapshot, RacingDrone, SurveyDrone


def test_delivery_round_trip_preserves_cargo_and_waypoint() -> None:
    drone = DeliveryDrone(3, "Hauler", 15)
    drone.update_load(6.5)
    drone.set_waypoint(48.85, 2.35)

    snapshot = to_snapshot(drone)
    rebuilt = to_drone(snapshot)

    assert rebuilt.success
    assert isinstance(rebuilt.value, DeliveryDrone)
    assert to_snapshot(rebuilt.value) == snapshot
    assert snapshot.load_kg == 6.5
    assert (snapshot.waypoint_lat, snapshot.waypoint_lon) == (48.85, 2.35)


def test_survey_snapshot_carries_photo_count() -> None:
    drone = SurveyDrone(4, "Eye")
    drone.take_off()
    drone.take_photo()
    drone.take_photo()

    snapshot = to_snapshot(drone)

    assert snapshot.kind is DroneKind.SURVEY
    assert snapshot.photo_count == 2
    assert snapshot.is_airborne
    assert snapshot.load_kg is None


def test_racing_snapshot_has_no_optional_fields() -> None:
    snapshot = to_snapshot(RacingDrone(5, "Zoom"))

    assert snapshot.load_kg is None
    assert snapshot.photo_count is None
    assert snapshot.waypoint_lat is None


def test_restoring_airborne_drone_skips_take_off_rules() -> None:
    snapshot = DroneSnapshot(id=1, name="Low", kind=DroneKind.RACING, battery_percent=5, is_airborne=True)

    rebuilt = to_drone(snapshot)

    assert rebuilt.success
    assert rebuilt.value.is_airborne
    assert rebuilt.value.battery_percent == 5.0


def test_out_of_range_battery_is_rejected() -> None:
    snapshot = DroneSnapshot(Id=1, Name="Hot", Kind="Survey", BatteryPercent=120)

    result = to_drone(snapshot)

    assert result.code is ResultCode.VALIDATION
    assert "between 0 and 100" in result.error


def test_blank_name_is_rejected() -> None:
    snapshot = DroneSnapshot(id=1, name="  ", kind=DroneKind.SURVEY, battery_percent=50)

    assert to_drone(snapshot).error == "Snapshot name cannot be empty."


def test_snapshot_accepts_kind_ordinals_and_names() -> None:
    assert DroneSnapshot(Id=1, Name="a", Kind=1, BatteryPercent=1).kind is DroneKind.SURVEY
    assert DroneSnapshot(Id=1, Name="a", Kind="delivery", BatteryPercent=1).kind is DroneKind.DELIVERY
    with pytest.raises(ValueError):
        DroneSnapshot(Id=1, Name="a", Kind=9, BatteryPercent=1)


def test_to_snapshot_rejects_none() -> None:
    with pytest.raises(TypeError):
        to_snapshot(None)


def test_kind_specific_snapshotters_reject_other_drone_types() -> None:
    with pytest.raises(TypeError):
        _delivery_snapshot(RacingDrone(1, "Zoom"))
    with pytest.raises(TypeError):
        _survey_snapshot(DeliveryDrone(2, "Hauler"))
