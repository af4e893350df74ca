"""Mini README: Built-in drone update handlers.

Structure:
    * BatteryChargeHandler / BatteryUpdateHandler - battery adjustments, any kind.
    * TakeOffHandler / LandHandler / PreflightHandler - flight control, any kind.
    * WaypointHandler - delivery and survey drones.
    * CargoLoadHandler / CargoUnloadHandler - delivery drones.
    * CapturePhotoHandler - survey drones.
    * register_default_handlers - wires the handlers and their aliases.

Handlers parse their own arguments and call the fleet service, so the
business rules stay in one place.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..common import OperationResult, ResultCode
from ..models import DeliveryDrone, Drone, DroneKind, SurveyDrone
from .context import CommandContext
from .updates import DroneUpdateHandler, DroneUpdateRegistry, UpdateResponse


def _parse_number(token: str) -> Optional[float]:
    try:
        value = float(token)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _invalid(message: str) -> UpdateResponse:
    return UpdateResponse(OperationResult.fail(message, ResultCode.VALIDATION))


def _rejects_arguments(arguments: Sequence[str], action: str) -> Optional[UpdateResponse]:
    if arguments:
        return _invalid(f"{action} does not accept parameters.")
    return None


class BatteryChargeHandler(DroneUpdateHandler):
    keyword = "charge"
    usage = "charge <percent>"

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        if not arguments:
            return _invalid("Charge action requires a percentage value.")
        amount = _parse_number(arguments[0])
        if amount is None:
            return _invalid("Invalid charge percentage.")
        result = context.fleet_service.charge_drone(drone.id, amount)
        if not result.success:
            return UpdateResponse(result)
        return UpdateResponse(result, f"Drone {drone.id} charged. Battery level: {drone.battery_percent:g}%")


class BatteryUpdateHandler(DroneUpdateHandler):
    keyword = "battery"
    usage = "battery <percent>"

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        if not arguments:
            return _invalid("Battery update requires a percentage value.")
        level = _parse_number(arguments[0])
        if level is None:
            return _invalid("Invalid battery percentage.")
        result = context.fleet_service.update_battery(drone.id, level)
        if not result.success:
            return UpdateResponse(result)
        return UpdateResponse(result, f"Drone {drone.id} battery set to {drone.battery_percent:g}%")


class TakeOffHandler(DroneUpdateHandler):
    keyword = "takeoff"
    usage = "takeoff"

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        rejected = _rejects_arguments(arguments, "Takeoff")
        if rejected:
            return rejected
        result = context.fleet_service.take_off(drone.id)
        return UpdateResponse(result, f"Drone {drone.id} is now airborne." if result.success else None)


class LandHandler(DroneUpdateHandler):
    keyword = "land"
    usage = "land"

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        rejected = _rejects_arguments(arguments, "Land")
        if rejected:
            return rejected
        result = context.fleet_service.land(drone.id)
        return UpdateResponse(result, f"Drone {drone.id} landed successfully." if result.success else None)


class PreflightHandler(DroneUpdateHandler):
    keyword = "preflight"
    usage = "preflight"

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        rejected = _rejects_arguments(arguments, "Preflight")
        if rejected:
            return rejected
        result = context.fleet_service.run_preflight_check(drone.id)
        if not result.success:
            return UpdateResponse(result)
        if not result.value:
            return _invalid(f"Drone {drone.id} failed the pre-flight check. Charge the battery before take-off.")
        return UpdateResponse(result, f"Drone {drone.id} passed the pre-flight check.")


class WaypointHandler(DroneUpdateHandler):
    keyword = "waypoint"
    usage = "waypoint <latitude> <longitude>"

    def supports(self, drone: Drone) -> bool:
        return drone is not None and drone.kind in (DroneKind.DELIVERY, DroneKind.SURVEY)

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        if len(arguments) < 2:
            return _invalid("Waypoint update requires latitude and longitude.")
        latitude = _parse_number(arguments[0])
        longitude = _parse_number(arguments[1])
        if latitude is None or longitude is None:
            return _invalid("Invalid waypoint coordinates.")
        result = context.fleet_service.set_waypoint(drone.id, latitude, longitude)
        if not result.success:
            return UpdateResponse(result)
        return UpdateResponse(result, f"Drone {drone.id} waypoint set to ({latitude:g}, {longitude:g}).")


class CargoLoadHandler(DroneUpdateHandler):
    keyword = "load"
    usage = "load <kilograms>"

    def supports(self, drone: Drone) -> bool:
        return isinstance(drone, DeliveryDrone)

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        if not arguments:
            return _invalid("Load update requires a weight in kilograms.")
        kilograms = _parse_number(arguments[0])
        if kilograms is None:
            return _invalid("Invalid cargo weight.")
        result = context.fleet_service.update_cargo_load(drone.id, kilograms)
        if not result.success:
            return UpdateResponse(result)
        return UpdateResponse(
            result, f"Drone {drone.id} load set to {drone.current_load_kg:g}/{drone.capacity_kg:g} kg."
        )


class CargoUnloadHandler(DroneUpdateHandler):
    keyword = "unload"
    usage = "unload"

    def supports(self, drone: Drone) -> bool:
        return isinstance(drone, DeliveryDrone)

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        rejected = _rejects_arguments(arguments, "Unload")
        if rejected:
            return rejected
        result = context.fleet_service.unload_cargo(drone.id)
        return UpdateResponse(result, f"Drone {drone.id} cargo unloaded." if result.success else None)


class CapturePhotoHandler(DroneUpdateHandler):
    keyword = "capture"
    usage = "capture"

    def supports(self, drone: Drone) -> bool:
        return isinstance(drone, SurveyDrone)

    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        rejected = _rejects_arguments(arguments, "Photo capture")
        if rejected:
            return rejected
        result = context.fleet_service.capture_photo(drone.id)
        if not result.success:
            return UpdateResponse(result)
        return UpdateResponse(result, f"Drone {drone.id} captured a photo. Total: {drone.photo_count}.")


def register_default_handlers(registry: DroneUpdateRegistry) -> DroneUpdateRegistry:
    registry.register(BatteryChargeHandler())
    registry.register(BatteryUpdateHandler())
    registry.register(TakeOffHandler(), "fly")
    registry.register(LandHandler())
    registry.register(WaypointHandler(), "wp")
    registry.register(CargoLoadHandler())
    registry.register(CargoUnloadHandler())
    registry.register(CapturePhotoHandler(), "snap")
    registry.register(PreflightHandler())
    return registry
