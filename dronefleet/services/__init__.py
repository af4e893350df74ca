"""Mini README: Service layer for the DroneFleet simulator.

``DroneFleetService`` is the facade consumed by the console; the importer and
exporter modules hold the bulk file pipelines it delegates to.
"""

from .exporter import FleetExporter
from .fleet_service import DroneFleetService
from .importer import FleetImporter, ImportCancelledError

__all__ = ["DroneFleetService", "FleetExporter", "FleetImporter", "ImportCancelledError"]
