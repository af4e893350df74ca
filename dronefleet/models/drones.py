"""Mini README: Drone entities and their simulated flight operations.

Structure:
    * DroneKind - closed set of drone categories.
    * Waypoint - immutable latitude/longitude pair.
    * Drone - base entity with battery and airborne state.
    * DeliveryDrone / SurveyDrone / RacingDrone - concrete kinds.

Every mutating operation returns an ``OperationResult`` so callers can show
the reason a request was refused. Battery values are kept inside
``[0, 100]`` and rounded to two decimals. The ``apply_*`` helpers restore
persisted state without running the business rules that gate live
operations; they are used by the snapshot mapper only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from ..common import OperationResult, ResultCode

MIN_TAKEOFF_BATTERY = 20.0
BASE_TAKEOFF_DRAIN = 5.0


def round_half_up(value: float, places: int = 2) -> float:
    """Round away from zero at the midpoint, unlike ``round``."""

    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class DroneKind(str, Enum):
    """Supported drone categories."""

    DELIVERY = "Delivery"
    SURVEY = "Survey"
    RACING = "Racing"

    @classmethod
    def parse(cls, value: str) -> Optional["DroneKind"]:
        """Return the kind matching ``value`` ignoring case, or ``None``."""

        if value is None:
            return None
        normalised = str(value).strip().lower()
        for kind in cls:
            if kind.value.lower() == normalised or kind.name.lower() == normalised:
                return kind
        return None


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Navigation target expressed in decimal degrees."""

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


class Drone:
    """Common state and behaviour shared by all drone kinds."""

    kind: DroneKind

    def __init__(self, drone_id: int, name: str = "Unnamed Drone") -> None:
        self._id = int(drone_id)
        self.name = name
        self._battery_percent = 100.0
        self._is_airborne = False

    @property
    def id(self) -> int:
        return self._id

    @property
    def battery_percent(self) -> float:
        return self._battery_percent

    @property
    def is_airborne(self) -> bool:
        return self._is_airborne

    def _drain_battery(self, amount: float) -> OperationResult[None]:
        if math.isnan(amount) or amount <= 0:
            return OperationResult.fail("Drain amount must be a positive number.", ResultCode.VALIDATION)
        if self._battery_percent < amount:
            return OperationResult.fail(
                "Insufficient battery for the requested operation.", ResultCode.VALIDATION
            )
        self._battery_percent = round_half_up(max(0.0, self._battery_percent - amount))
        return OperationResult.ok()

    def _takeoff_drain(self) -> float:
        return BASE_TAKEOFF_DRAIN

    def _takeoff_threshold(self) -> float:
        return max(MIN_TAKEOFF_BATTERY, self._takeoff_drain())

    def set_battery_percent(self, value: float) -> OperationResult[None]:
        """Set the battery to an absolute percentage inside ``[0, 100]``."""

        if value is None or math.isnan(value) or value < 0 or value > 100:
            return OperationResult.fail("Battery percent must be between 0 and 100.", ResultCode.VALIDATION)
        self._battery_percent = round_half_up(value)
        return OperationResult.ok()

    def apply_telemetry(self, battery_percent: float, is_airborne: bool) -> OperationResult[None]:
        """Restore telemetry captured elsewhere; the battery range is still enforced."""

        result = self.set_battery_percent(battery_percent)
        if not result.success:
            return result
        self._is_airborne = bool(is_airborne)
        return OperationResult.ok()

    def charge_battery(self, amount: float) -> OperationResult[None]:
        """Add charge, clamping the level at 100 percent."""

        if amount is None or math.isnan(amount) or amount < 0:
            return OperationResult.fail("Charge amount must be a non-negative number.", ResultCode.VALIDATION)
        self._battery_percent = round_half_up(min(100.0, self._battery_percent + amount))
        return OperationResult.ok()

    def take_off(self) -> OperationResult[None]:
        drain = self._takeoff_drain()
        threshold = self._takeoff_threshold()
        if self._battery_percent < threshold:
            return OperationResult.fail(
                f"Insufficient battery for take-off. Minimum {threshold:g}% required.",
                ResultCode.VALIDATION,
            )
        if self._is_airborne:
            return OperationResult.fail("Drone is already airborne.", ResultCode.VALIDATION)
        drained = self._drain_battery(drain)
        if not drained.success:
            return drained
        self._is_airborne = True
        return OperationResult.ok()

    def land(self) -> None:
        self._is_airborne = False

    def run_self_test(self) -> bool:
        """Return ``True`` when the drone has enough charge to take off."""

        return self._battery_percent >= self._takeoff_threshold()

    def describe(self) -> str:
        return (
            f"[{self.kind.value}] #{self.id} {self.name} | Battery {self.battery_percent:g}% "
            f"| Airborne {self.is_airborne}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, name={self.name!r}, battery={self.battery_percent})"


class DeliveryDrone(Drone):
    """Drone that carries cargo up to a fixed capacity."""

    kind = DroneKind.DELIVERY
    DEFAULT_CAPACITY_KG = 10.0
    BASE_NAVIGATION_DRAIN = 2.0
    LOAD_DRAIN_FACTOR = 0.1

    def __init__(self, drone_id: int, name: str = "Unnamed Drone", capacity_kg: Optional[float] = None) -> None:
        super().__init__(drone_id, name)
        requested = self.DEFAULT_CAPACITY_KG if capacity_kg is None else float(capacity_kg)
        self._capacity_kg = max(self.DEFAULT_CAPACITY_KG, requested)
        self._current_load_kg = 0.0
        self.current_waypoint: Optional[Waypoint] = None

    @property
    def capacity_kg(self) -> float:
        return self._capacity_kg

    @property
    def current_load_kg(self) -> float:
        return self._current_load_kg

    def _takeoff_drain(self) -> float:
        return round_half_up(BASE_TAKEOFF_DRAIN + self._current_load_kg * self.LOAD_DRAIN_FACTOR)

    def apply_snapshot(self, load_kg: Optional[float], waypoint: Optional[Waypoint]) -> None:
        """Restore persisted cargo and waypoint without flight-state checks."""

        load = max(0.0, load_kg) if load_kg is not None and math.isfinite(load_kg) else 0.0
        if load > self._capacity_kg:
            self._capacity_kg = load
        self._current_load_kg = round_half_up(min(load, self._capacity_kg))
        self.current_waypoint = waypoint

    def update_load(self, kilograms: float) -> OperationResult[None]:
        if kilograms is None or math.isnan(kilograms) or kilograms < 0 or kilograms > self._capacity_kg:
            return OperationResult.fail(
                f"Load must be between 0 and {self._capacity_kg:g} kg.", ResultCode.VALIDATION
            )
        if self._is_airborne:
            return OperationResult.fail("Cannot modify load while airborne.", ResultCode.VALIDATION)
        self._current_load_kg = min(round_half_up(kilograms), self._capacity_kg)
        return OperationResult.ok()

    def unload_all(self) -> OperationResult[None]:
        if self._is_airborne:
            return OperationResult.fail("Cannot unload while airborne.", ResultCode.VALIDATION)
        self._current_load_kg = 0.0
        return OperationResult.ok()

    def set_waypoint(self, latitude: float, longitude: float) -> OperationResult[None]:
        drain = round_half_up(self.BASE_NAVIGATION_DRAIN + self._current_load_kg * self.LOAD_DRAIN_FACTOR)
        if self._battery_percent < drain:
            return OperationResult.fail(
                f"Insufficient battery for movement. Minimum {drain:g}% required.", ResultCode.VALIDATION
            )
        drained = self._drain_battery(drain)
        if not drained.success:
            return drained
        self.current_waypoint = Waypoint(latitude, longitude)
        return OperationResult.ok()

    def describe(self) -> str:
        return (
            f"{super().describe()} | Load {self.current_load_kg:g}/{self.capacity_kg:g} kg "
            f"| Waypoint {self.current_waypoint or 'None'}"
        )


class SurveyDrone(Drone):
    """Drone that navigates to waypoints and captures photos."""

    kind = DroneKind.SURVEY
    NAVIGATION_DRAIN = 2.0
    PHOTO_DRAIN = 1.0

    def __init__(self, drone_id: int, name: str = "Unnamed Drone") -> None:
        super().__init__(drone_id, name)
        self._photo_count = 0
        self.current_waypoint: Optional[Waypoint] = None

    @property
    def photo_count(self) -> int:
        return self._photo_count

    def apply_snapshot(self, photo_count: Optional[int], waypoint: Optional[Waypoint]) -> None:
        """Restore the persisted photo counter and waypoint."""

        self._photo_count = max(0, photo_count or 0)
        self.current_waypoint = waypoint

    def set_waypoint(self, latitude: float, longitude: float) -> OperationResult[None]:
        if self._battery_percent < self.NAVIGATION_DRAIN:
            return OperationResult.fail(
                f"Insufficient battery for movement. Minimum {self.NAVIGATION_DRAIN:g}% required.",
                ResultCode.VALIDATION,
            )
        drained = self._drain_battery(self.NAVIGATION_DRAIN)
        if not drained.success:
            return drained
        self.current_waypoint = Waypoint(latitude, longitude)
        return OperationResult.ok()

    def take_photo(self) -> OperationResult[None]:
        if not self._is_airborne:
            return OperationResult.fail("Drone must be airborne to take photos.", ResultCode.VALIDATION)
        if self._battery_percent < self.PHOTO_DRAIN:
            return OperationResult.fail(
                f"Insufficient battery for survey. Minimum {self.PHOTO_DRAIN:g}% required.",
                ResultCode.VALIDATION,
            )
        drained = self._drain_battery(self.PHOTO_DRAIN)
        if not drained.success:
            return drained
        self._photo_count += 1
        return OperationResult.ok()

    def describe(self) -> str:
        return (
            f"{super().describe()} | Photos {self.photo_count} "
            f"| Waypoint {self.current_waypoint or 'None'}"
        )


class RacingDrone(Drone):
    """Lightweight drone with a cheaper take-off."""

    kind = DroneKind.RACING
    TAKEOFF_DRAIN = 3.0

    def _takeoff_drain(self) -> float:
        return self.TAKEOFF_DRAIN
