"""Mini README: Aggregate metrics computed over a collection of drones.

Structure:
    * KindBreakdown - count of drones for one kind.
    * FleetSummary - totals, averages, and top battery levels.
    * summarise_fleet - build a summary from any iterable of drones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from ..models import DeliveryDrone, Drone, DroneKind, round_half_up


@dataclass(frozen=True, slots=True)
class KindBreakdown:
    kind: DroneKind
    count: int


@dataclass(frozen=True, slots=True)
class FleetSummary:
    """Point-in-time statistics describing the fleet."""

    total_drones: int
    airborne_drones: int
    average_battery_percent: float
    total_cargo_load_kg: float
    drones_by_kind: Tuple[KindBreakdown, ...]
    top_battery_levels: Tuple[float, ...]


def summarise_fleet(drones: Iterable[Drone], top_count: int = 3) -> FleetSummary:
    """Summarise ``drones``; empty fleets produce zeroed metrics."""

    snapshot = list(drones)
    total = len(snapshot)
    average = round_half_up(sum(drone.battery_percent for drone in snapshot) / total) if total else 0.0
    cargo = round_half_up(
        sum(drone.current_load_kg for drone in snapshot if isinstance(drone, DeliveryDrone))
    )
    counts = {kind: sum(1 for drone in snapshot if drone.kind is kind) for kind in DroneKind}
    by_kind = tuple(KindBreakdown(kind, count) for kind, count in counts.items() if count > 0)
    top_levels: Tuple[float, ...] = ()
    if top_count > 0:
        top_levels = tuple(
            round_half_up(level)
            for level in sorted((drone.battery_percent for drone in snapshot), reverse=True)[:top_count]
        )
    return FleetSummary(
        total_drones=total,
        airborne_drones=sum(1 for drone in snapshot if drone.is_airborne),
        average_battery_percent=average,
        total_cargo_load_kg=cargo,
        drones_by_kind=by_kind,
        top_battery_levels=top_levels,
    )
