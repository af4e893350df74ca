"""Mini README: Built-in shell commands.

Structure:
    * HelpCommand - overview of every command or details for one.
    * ImportCommand / ExportCommand - bulk CSV and JSON file transfer.
    * ListCommand / StatsCommand - fleet inspection.
    * AddCommand / RemoveCommand - fleet membership.
    * ActionCommand - per-drone updates dispatched through the update registry.
    * ExitCommand - leave the shell.

Outcomes of service calls are reported as HTTP-style status lines while
usage hints are printed plainly.
"""

from __future__ import annotations

import re
import threading
from typing import List, Optional, Sequence

from ..common import OperationResult, ResultCode
from ..fileio import candidate_roots, resolve_destination_path
from ..models import Drone, DroneKind, FleetImportResult
from ..services import ImportCancelledError
from .context import CommandContext
from .registry import CommandRegistry, ConsoleCommand
from .status import format_status
from .updates import DroneUpdateRegistry


def _parse_id(token: str) -> Optional[int]:
    try:
        return int(token)
    except (TypeError, ValueError):
        return None


def _invalid(message: str) -> OperationResult[None]:
    return OperationResult.fail(message, ResultCode.VALIDATION)


class HelpCommand(ConsoleCommand):
    name = "help"
    description = "Displays this help message or detailed info for a specific command."
    usage = "help [<command>]"
    help_text = (
        "Without arguments shows all commands.\n"
        "Provide a command name to see detailed help for it (e.g. 'help action')."
    )

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if arguments:
            command = self._registry.get(arguments[0])
            if command is None:
                context.warning(f"Unknown command '{arguments[0]}'.")
                return
            context.info(f"Help: {command.name}")
            if command.description:
                context.info(command.description)
            if command.usage:
                context.info("Usage: " + command.usage)
            for line in command.help_text.splitlines():
                context.info(line)
            return

        context.write("Available commands (use 'help <command>' for details):")
        for command in self._registry.commands:
            context.write(f"  {command.name:<10} - {command.description}")
            if command.usage:
                context.write(f"     Usage: {command.usage}")


class ImportCommand(ConsoleCommand):
    name = "import"
    description = "Imports fleet data from CSV or JSON files."
    usage = "import <file1.csv|file1.json> [file2 ...]"
    help_text = (
        "Files are processed concurrently; relative paths are resolved against the project root.\n"
        "Example: import data/fleet.csv data/extra.json"
    )

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if not arguments:
            context.info("Usage: " + self.usage)
            return

        cancel_event = threading.Event()
        try:
            result = await context.fleet_service.import_files(arguments, cancel_event, roots=context.roots)
        except ImportCancelledError:
            context.warning("Import cancelled.")
            return

        if not result.success:
            context.error(format_status(result))
            return
        self._write_summary(context, result.value)

    @staticmethod
    def _write_summary(context: CommandContext, summary: FleetImportResult) -> None:
        context.info(f"Files processed: {summary.files_processed}")
        context.info(f"Rows processed: {summary.total_rows}")
        if len(summary.files) > 1:
            for file in summary.files:
                context.info(f"  {file.source}: {file.imported}/{file.total_rows} imported")
        if summary.has_imports:
            context.success(f"Imported: {summary.imported}")
        else:
            context.warning("Imported: 0")
            context.warning("No drones were imported.")
        if summary.duplicates:
            context.warning(f"Duplicates skipped: {summary.duplicates}")
        else:
            context.info("Duplicates skipped: 0")
        if summary.malformed:
            context.error(f"Malformed rows: {summary.malformed}")
        else:
            context.info("Malformed rows: 0")
        if summary.issues:
            context.warning("Issues:")
            for issue in summary.issues:
                context.warning(f"  {issue}")
        else:
            context.success("No issues detected.")


class ExportCommand(ConsoleCommand):
    name = "export"
    description = "Exports the fleet to JSON or CSV."
    usage = "export json <path> | export csv <path>"
    help_text = (
        "Relative paths are resolved against the project root.\n"
        "Example: export csv data/out/fleet.csv"
    )

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if len(arguments) < 2:
            context.info("Usage: " + self.usage)
            return

        file_format = arguments[0].lower()
        destination = arguments[1]
        if file_format not in ("json", "csv"):
            context.error(format_status(_invalid("Unknown export format."), "Unknown export format. Use 'json' or 'csv'."))
            return

        if destination.strip():
            roots = context.roots if context.roots is not None else candidate_roots()
            target = resolve_destination_path(destination, roots)
            if target.exists() and not context.confirm(f"File '{target}' already exists. Overwrite?"):
                context.warning("Export cancelled (overwrite declined).")
                return

        service = context.fleet_service
        if file_format == "json":
            result = await service.export_to_json(destination, roots=context.roots)
        else:
            result = await service.export_to_csv(destination, roots=context.roots)

        if not result.success:
            context.error(format_status(result))
            return
        context.success(format_status(result, f"Exported fleet to {result.value}."))


class ListCommand(ConsoleCommand):
    name = "list"
    description = "Lists drones (all, airborne, or by type)."
    usage = "list all | list airborne | list by type <kind> | list id <id> | list ids <id1,id2,...>"
    help_text = (
        "list all - every drone\n"
        "list airborne - drones currently in flight\n"
        "list by type <kind> - filter by delivery | survey | racing\n"
        "list id <id> - a single drone\n"
        "list ids <id1,id2,...> - specific drones (comma or space separated)"
    )

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if not arguments:
            context.info("Usage: " + self.usage)
            return

        mode = arguments[0].lower()
        rest = list(arguments[1:])
        service = context.fleet_service
        if mode == "all":
            drones = service.list_all()
        elif mode == "airborne":
            drones = service.list_airborne()
        elif mode == "by":
            if len(rest) < 2 or rest[0].lower() != "type":
                context.info("Usage: list by type <kind>")
                return
            drones = self._by_kind(context, rest[1:])
        elif mode == "type":
            drones = self._by_kind(context, rest)
        elif mode == "id":
            drones = self._single(context, rest)
        elif mode == "ids":
            drones = self._many(context, rest)
        else:
            context.info("Usage: " + self.usage)
            return

        if drones is None:
            return
        if not drones:
            context.warning("No drones found.")
            return
        for drone in drones:
            context.write(drone.describe())

    @staticmethod
    def _by_kind(context: CommandContext, arguments: List[str]) -> Optional[List[Drone]]:
        if not arguments:
            context.info("Usage: list by type <kind>")
            return None
        kind = DroneKind.parse(arguments[0])
        if kind is None:
            context.error(
                format_status(
                    _invalid("Unknown drone type."), "Unknown drone type. Supported values: delivery, survey, racing."
                )
            )
            return None
        return context.fleet_service.list_by_kind(kind)

    @staticmethod
    def _single(context: CommandContext, arguments: List[str]) -> Optional[List[Drone]]:
        if not arguments:
            context.info("Usage: list id <id>")
            return None
        drone_id = _parse_id(arguments[0])
        if drone_id is None:
            context.error(format_status(_invalid("Invalid id value.")))
            return None
        found = context.fleet_service.get_drone(drone_id)
        if not found.success:
            context.warning(format_status(found))
            return None
        return [found.value]

    @staticmethod
    def _many(context: CommandContext, arguments: List[str]) -> Optional[List[Drone]]:
        if not arguments:
            context.info("Usage: list ids <id1,id2,...>")
            return None
        ids: List[int] = []
        for token in re.split(r"[,\s]+", " ".join(arguments)):
            if not token:
                continue
            drone_id = _parse_id(token)
            if drone_id is None:
                context.warning(format_status(_invalid("Invalid id token."), f"Skipping invalid id '{token}'."))
            elif drone_id not in ids:
                ids.append(drone_id)
        if not ids:
            context.warning(format_status(_invalid("No valid ids provided.")))
            return None
        drones: List[Drone] = []
        for drone_id in ids:
            found = context.fleet_service.get_drone(drone_id)
            if found.success:
                drones.append(found.value)
            else:
                context.warning(format_status(found))
        return drones


class StatsCommand(ConsoleCommand):
    name = "stats"
    description = "Shows fleet statistics."
    usage = "stats"

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        summary = context.fleet_service.get_summary()
        context.info(f"Total drones: {summary.total_drones}")
        context.info(f"Airborne: {summary.airborne_drones}")
        context.info(f"Average battery: {summary.average_battery_percent:g}%")
        context.info(f"Total cargo load: {summary.total_cargo_load_kg:g} kg")
        if summary.drones_by_kind:
            context.info("Drones by type:")
            for entry in summary.drones_by_kind:
                context.info(f"  {entry.kind.value}: {entry.count}")
        if summary.top_battery_levels:
            context.info("Top battery levels:")
            for level in summary.top_battery_levels:
                context.info(f"  {level:g}%")


class AddCommand(ConsoleCommand):
    name = "add"
    description = "Adds a new drone to the fleet."
    usage = "add <delivery|survey|racing> <name> [capacity_kg]"
    help_text = (
        "Quote names that contain spaces. Capacity applies to delivery drones only.\n"
        'Example: add delivery "Parcel Hauler" 25'
    )

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if len(arguments) < 2:
            context.info("Usage: " + self.usage)
            return
        kind = DroneKind.parse(arguments[0])
        if kind is None:
            context.error(format_status(_invalid("Unknown drone type. Supported values: delivery, survey, racing.")))
            return
        capacity: Optional[float] = None
        if len(arguments) > 2:
            try:
                capacity = float(arguments[2])
            except ValueError:
                context.error(format_status(_invalid("Invalid capacity value.")))
                return
        result = context.fleet_service.create_drone(kind, arguments[1], capacity)
        if not result.success:
            context.error(format_status(result))
            return
        context.success(format_status(result, f"Added {result.value.describe()}"))


class RemoveCommand(ConsoleCommand):
    name = "remove"
    description = "Removes a drone from the fleet."
    usage = "remove <id>"

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if not arguments:
            context.info("Usage: " + self.usage)
            return
        drone_id = _parse_id(arguments[0])
        if drone_id is None:
            context.error(format_status(_invalid("Invalid id value.")))
            return
        result = context.fleet_service.remove_drone(drone_id)
        if not result.success:
            context.error(format_status(result))
            return
        context.success(format_status(result, f"Drone {drone_id} removed."))


class ActionCommand(ConsoleCommand):
    name = "action"
    description = "Performs an action on a drone (charge, takeoff, land, waypoint, cargo, snap)."
    usage = "action <id> <verb> [parameters]"

    def __init__(self, updates: DroneUpdateRegistry) -> None:
        self._updates = updates

    @property
    def help_text(self) -> str:
        return "\n".join(
            [
                "Verbs: " + ", ".join(self._updates.all_keywords()),
                "Examples:",
                "  action 1 charge 75",
                "  action 2 takeoff",
                "  action 3 waypoint 51.5 -0.12",
                "  action 4 load 3.5",
                "  action 4 unload",
                "  action 5 snap",
            ]
        )

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        if len(arguments) < 2:
            context.info("Usage: " + self.usage)
            return
        drone_id = _parse_id(arguments[0])
        if drone_id is None:
            context.error(format_status(_invalid("Invalid id value.")))
            return
        found = context.fleet_service.get_drone(drone_id)
        if not found.success:
            context.error(format_status(found))
            return

        drone = found.value
        verb = arguments[1].lower()
        handler = self._updates.resolve(verb, drone)
        if handler is None:
            context.warning(format_status(_invalid(f"Unsupported action '{verb}' for {drone.kind.value} drones.")))
            suggestions = self._updates.supported_keywords(drone)
            if suggestions:
                context.info("Available: " + ", ".join(suggestions))
            return

        response = handler.execute(context, drone, list(arguments[2:]))
        if not response.result.success:
            context.error(format_status(response.result))
            return
        message = response.message or f"Action completed for drone {drone.id}."
        context.success(format_status(response.result, message))


class ExitCommand(ConsoleCommand):
    name = "exit"
    description = "Exits the shell."
    usage = "exit"

    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        context.info("Goodbye.")
        context.request_exit()
