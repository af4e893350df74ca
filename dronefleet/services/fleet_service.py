"""Mini README: Fleet service facade used by the console layer.

Structure:
    * DroneFleetService - typed operations over the drone repository plus
      import, export, and summary helpers.

Every operation first resolves the drone id (``NOT_FOUND`` when absent)
and then delegates to the kind-specific behaviour, answering
``VALIDATION`` when the operation does not apply to that kind. Expected
failures are returned as ``OperationResult`` values, never raised.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..analytics import FleetSummary, summarise_fleet
from ..common import OperationResult, ResultCode
from ..logging_utils import get_logger
from ..models import DeliveryDrone, Drone, DroneKind, FleetImportResult, RacingDrone, SurveyDrone
from ..storage import DroneRepository
from .exporter import FleetExporter
from .importer import FleetImporter

LOGGER = get_logger(__name__)

_CREATORS: Dict[DroneKind, Callable[[int, str, Optional[float]], Drone]] = {
    DroneKind.DELIVERY: lambda drone_id, name, capacity: DeliveryDrone(drone_id, name, capacity),
    DroneKind.SURVEY: lambda drone_id, name, capacity: SurveyDrone(drone_id, name),
    DroneKind.RACING: lambda drone_id, name, capacity: RacingDrone(drone_id, name),
}


class DroneFleetService:
    """Facade combining storage, snapshot mapping, import and export."""

    def __init__(self, repository: Optional[DroneRepository] = None) -> None:
        self._repository = repository if repository is not None else DroneRepository()
        self._importer = FleetImporter(self._repository)
        self._exporter = FleetExporter(self._repository)

    @property
    def repository(self) -> DroneRepository:
        return self._repository

    # Queries -----------------------------------------------------------------

    def list_all(self) -> List[Drone]:
        return sorted(self._repository.list(), key=lambda drone: drone.id)

    def list_airborne(self) -> List[Drone]:
        return [drone for drone in self.list_all() if drone.is_airborne]

    def list_by_kind(self, kind: DroneKind) -> List[Drone]:
        return [drone for drone in self.list_all() if drone.kind is kind]

    def get_drone(self, drone_id: int) -> OperationResult[Drone]:
        return self._repository.get(drone_id)

    def get_summary(self) -> FleetSummary:
        return summarise_fleet(self._repository.list())

    # Lifecycle ---------------------------------------------------------------

    def create_drone(self, kind: DroneKind, name: str, capacity_kg: Optional[float] = None) -> OperationResult[Drone]:
        """Create a drone of ``kind`` under the next free id."""

        if not name or not name.strip():
            return OperationResult.fail("Drone name cannot be empty.", ResultCode.VALIDATION)
        creator = _CREATORS.get(kind)
        if creator is None:
            return OperationResult.fail(f"Unsupported drone kind '{kind}'.", ResultCode.VALIDATION)
        if capacity_kg is not None and kind is not DroneKind.DELIVERY:
            return OperationResult.fail("Only delivery drones accept a cargo capacity.", ResultCode.VALIDATION)
        drone = creator(self._repository.next_id(), name.strip(), capacity_kg)
        added = self._repository.add(drone)
        if added.success:
            LOGGER.info("Created %s drone #%s '%s'", kind.value, drone.id, drone.name)
        return added

    def remove_drone(self, drone_id: int) -> OperationResult[None]:
        result = self._repository.remove(drone_id)
        if result.success:
            LOGGER.info("Removed drone #%s", drone_id)
        return result

    # Operations --------------------------------------------------------------

    def charge_drone(self, drone_id: int, percent: float) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        return found.value.charge_battery(percent)

    def update_battery(self, drone_id: int, percent: float) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        return found.value.set_battery_percent(percent)

    def take_off(self, drone_id: int) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        return found.value.take_off()

    def land(self, drone_id: int) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        drone = found.value
        if not drone.is_airborne:
            return OperationResult.fail("Drone is already grounded.", ResultCode.VALIDATION)
        drone.land()
        return OperationResult.ok()

    def set_waypoint(self, drone_id: int, latitude: float, longitude: float) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        drone = found.value
        if drone.kind is DroneKind.DELIVERY or drone.kind is DroneKind.SURVEY:
            return drone.set_waypoint(latitude, longitude)
        return OperationResult.fail("Drone type does not support waypoints.", ResultCode.VALIDATION)

    def update_cargo_load(self, drone_id: int, kilograms: float) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        drone = found.value
        if drone.kind is DroneKind.DELIVERY:
            return drone.update_load(kilograms)
        return OperationResult.fail("Drone type does not support cargo load updates.", ResultCode.VALIDATION)

    def unload_cargo(self, drone_id: int) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        drone = found.value
        if drone.kind is DroneKind.DELIVERY:
            return drone.unload_all()
        return OperationResult.fail("Drone type does not support cargo unloading.", ResultCode.VALIDATION)

    def capture_photo(self, drone_id: int) -> OperationResult[None]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        drone = found.value
        if drone.kind is DroneKind.SURVEY:
            return drone.take_photo()
        return OperationResult.fail("Drone type does not support photo capture.", ResultCode.VALIDATION)

    def run_preflight_check(self, drone_id: int) -> OperationResult[bool]:
        found = self._repository.get(drone_id)
        if not found.success:
            return OperationResult.from_failure(found)
        return OperationResult.ok(found.value.run_self_test())

    # Bulk I/O ----------------------------------------------------------------

    async def import_files(
        self,
        file_paths: Iterable[str],
        cancel_event: Optional[threading.Event] = None,
        *,
        roots: Optional[Sequence[Path]] = None,
    ) -> OperationResult[FleetImportResult]:
        return await self._importer.import_files(file_paths, cancel_event, roots=roots)

    async def export_to_csv(self, destination: str, *, roots: Optional[Sequence[Path]] = None) -> OperationResult[Path]:
        return await self._exporter.export_csv(destination, roots=roots)

    async def export_to_json(self, destination: str, *, roots: Optional[Sequence[Path]] = None) -> OperationResult[Path]:
        return await self._exporter.export_json(destination, roots=roots)
