"""Mini README: Interactive read-eval loop for the fleet shell.

Structure:
    * build_command_registry - wire the default commands and update handlers.
    * FleetConsoleApp - tokenise input lines, dispatch commands, report errors.

Lines are split with shell-style quoting so names and paths may contain
spaces. Each command runs to completion in its own event loop; an
unexpected exception is logged and reported as a single error line.
"""

from __future__ import annotations

import asyncio
import shlex
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from ..logging_utils import get_logger
from ..services import DroneFleetService
from .commands import (
    ActionCommand,
    AddCommand,
    ExitCommand,
    ExportCommand,
    HelpCommand,
    ImportCommand,
    ListCommand,
    RemoveCommand,
    StatsCommand,
)
from .context import CommandContext, Confirm, Echo
from .registry import CommandRegistry
from .update_handlers import register_default_handlers
from .updates import DroneUpdateRegistry

LOGGER = get_logger(__name__)

PROMPT = ">>> "


def build_command_registry(updates: Optional[DroneUpdateRegistry] = None) -> CommandRegistry:
    """Return a registry holding every built-in command."""

    if updates is None:
        updates = register_default_handlers(DroneUpdateRegistry())
    registry = CommandRegistry()
    registry.register(HelpCommand(registry), "?")
    registry.register(ImportCommand())
    registry.register(ExportCommand())
    registry.register(ListCommand())
    registry.register(StatsCommand())
    registry.register(AddCommand())
    registry.register(RemoveCommand())
    registry.register(ActionCommand(updates), "update")
    registry.register(ExitCommand(), "quit")
    return registry


class FleetConsoleApp:
    """Drive the shell until the operator exits or input ends."""

    def __init__(
        self,
        fleet_service: DroneFleetService,
        registry: Optional[CommandRegistry] = None,
        *,
        echo: Optional[Echo] = None,
        confirm: Optional[Confirm] = None,
        roots: Optional[Sequence[Path]] = None,
    ) -> None:
        self._fleet_service = fleet_service
        self._registry = registry or build_command_registry()
        self._running = False
        self._context = CommandContext(
            fleet_service, echo=echo, confirm=confirm, request_exit=self.stop, roots=roots
        )

    @property
    def running(self) -> bool:
        return self._running

    @property
    def context(self) -> CommandContext:
        return self._context

    def stop(self) -> None:
        self._running = False

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """Prompt with ``read_line`` until ``exit`` or end of input."""

        self._running = True
        self._context.info("DroneFleet shell. Type 'help' to see available commands.")
        while self._running:
            try:
                line = read_line(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                self._context.warning("Interrupted. Type 'exit' to quit.")
                continue
            self.execute_line(line)
        self._running = False

    def run_lines(self, lines: Iterable[str]) -> None:
        """Execute scripted lines, stopping early when a command requests exit."""

        self._running = True
        for line in lines:
            self.execute_line(line)
            if not self._running:
                break
        self._running = False

    def execute_line(self, line: str) -> None:
        if not line or not line.strip():
            return
        try:
            tokens = shlex.split(line)
        except ValueError as error:
            self._context.error(f"Could not parse command: {error}")
            return
        if not tokens:
            return

        name, arguments = tokens[0], tokens[1:]
        command = self._registry.get(name)
        if command is None:
            self._context.warning(f"Unknown command '{name}'. Type 'help' to see available commands.")
            return

        try:
            asyncio.run(command.execute(self._context, arguments))
        except KeyboardInterrupt:
            self._context.warning("Operation cancelled.")
        except Exception as error:
            LOGGER.exception("Command '%s' failed", name)
            self._context.error(f"Error: {error}")
