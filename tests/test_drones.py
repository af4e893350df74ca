"""Mini README: Tests for drone entities and their simulated operations.

Covers battery clamping, take-off thresholds per kind, cargo limits and
survey photo capture so the business rules stay stable while the import
and console layers evolve around them.
"""

from __future__ import annotations

import math

import pytest

from dronefleet.common import ResultCode
from dronefleet.models import DeliveryDrone, DroneKind, RacingDrone, SurveyDrone, Waypoint, round_half_up


def test_round_half_up_rounds_midpoints_away_from_zero() -> None:
    assert round_half_up(2.675) == 2.68
    assert round_half_up(0.125) == 0.13
    assert math.isinf(round_half_up(float("inf")))


@pytest.mark.parametrize("amount", [50.0, 1e6, 1e308])
def test_charge_battery_clamps_at_full(amount: float) -> None:
    drone = RacingDrone(1, "Zoom")
    drone.set_battery_percent(40)

    result = drone.charge_battery(amount)

    assert result.success
    assert drone.battery_percent == 100.0


def test_negative_charge_and_out_of_range_battery_are_rejected() -> None:
    drone = SurveyDrone(1, "Eye")

    assert drone.charge_battery(-1).code is ResultCode.VALIDATION
    assert not drone.set_battery_percent(101)
    assert not drone.set_battery_percent(float("nan"))
    assert drone.battery_percent == 100.0


def test_take_off_drains_battery_per_kind() -> None:
    racer = RacingDrone(1, "Zoom")
    survey = SurveyDrone(2, "Eye")

    assert racer.take_off().success
    assert survey.take_off().success

    assert racer.battery_percent == 97.0
    assert survey.battery_percent == 95.0
    assert racer.is_airborne and survey.is_airborne


def test_take_off_requires_minimum_battery_and_grounded_state() -> None:
    drone = SurveyDrone(1, "Eye")
    drone.set_battery_percent(19.5)

    low = drone.take_off()
    assert not low.success
    assert "Minimum 20%" in low.error

    drone.set_battery_percent(80)
    assert drone.take_off().success
    again = drone.take_off()
    assert again.error == "Drone is already airborne."


def test_delivery_take_off_drain_grows_with_load() -> None:
    drone = DeliveryDrone(1, "Hauler")
    assert drone.update_load(10).success

    assert drone.take_off().success
    assert drone.battery_percent == 94.0


def test_delivery_capacity_has_a_floor() -> None:
    assert DeliveryDrone(1, "Small", 5).capacity_kg == 10.0
    assert DeliveryDrone(2, "Large", 25).capacity_kg == 25.0


def test_load_never_exceeds_capacity() -> None:
    drone = DeliveryDrone(1, "Hauler", 12)

    for kilograms in (3.0, 12.0, 12.01, 40.0, -1.0, float("nan")):
        drone.update_load(kilograms)
        assert 0 <= drone.current_load_kg <= drone.capacity_kg

    assert drone.current_load_kg == 12.0


def test_load_changes_are_refused_while_airborne() -> None:
    drone = DeliveryDrone(1, "Hauler")
    drone.update_load(4)
    drone.take_off()

    assert drone.update_load(2).error == "Cannot modify load while airborne."
    assert drone.unload_all().error == "Cannot unload while airborne."
    assert drone.current_load_kg == 4.0


def test_delivery_waypoint_drain_includes_load() -> None:
    drone = DeliveryDrone(1, "Hauler")
    drone.update_load(5)

    assert drone.set_waypoint(51.5, -0.12).success
    assert drone.battery_percent == 97.5
    assert drone.current_waypoint == Waypoint(51.5, -0.12)


def test_apply_snapshot_grows_capacity_for_heavy_persisted_load() -> None:
    drone = DeliveryDrone(1, "Hauler")

    drone.apply_snapshot(18.0, None)

    assert drone.capacity_kg == 18.0
    assert drone.current_load_kg == 18.0


def test_survey_photo_requires_flight() -> None:
    drone = SurveyDrone(1, "Eye")
    assert drone.take_photo().error == "Drone must be airborne to take photos."

    drone.take_off()
    assert drone.take_photo().success
    assert drone.photo_count == 1
    assert drone.battery_percent == 94.0


def test_self_test_reflects_take_off_threshold() -> None:
    drone = RacingDrone(1, "Zoom")
    assert drone.run_self_test()

    drone.set_battery_percent(10)
    assert not drone.run_self_test()


def test_describe_includes_kind_specific_details() -> None:
    drone = DeliveryDrone(7, "Hauler", 20)
    drone.update_load(2.5)

    text = drone.describe()

    assert text.startswith("[Delivery] #7 Hauler")
    assert "Load 2.5/20 kg" in text


def test_kind_parse_is_case_insensitive() -> None:
    assert DroneKind.parse("SURVEY") is DroneKind.SURVEY
    assert DroneKind.parse(" racing ") is DroneKind.RACING
    assert DroneKind.parse("blimp") is None
