"""Mini README: Interactive console layer for the DroneFleet simulator.

Commands are looked up in ``CommandRegistry``; the ``action`` command
dispatches per-drone updates through ``DroneUpdateRegistry``.
"""

from .app import FleetConsoleApp, build_command_registry
from .context import CommandContext
from .registry import CommandRegistrationError, CommandRegistry, ConsoleCommand
from .status import format_status
from .update_handlers import register_default_handlers
from .updates import DroneUpdateHandler, DroneUpdateRegistry, UpdateResponse

__all__ = [
    "CommandContext",
    "CommandRegistrationError",
    "CommandRegistry",
    "ConsoleCommand",
    "DroneUpdateHandler",
    "DroneUpdateRegistry",
    "FleetConsoleApp",
    "UpdateResponse",
    "build_command_registry",
    "format_status",
    "register_default_handlers",
]
