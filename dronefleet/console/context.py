"""Mini README: Shared state handed to every console command.

Structure:
    * CommandContext - fleet service, coloured output helpers, the overwrite
      confirmation prompt, and the exit request hook.

Output goes through ``typer.secho`` by default; tests pass a recording
callable with the same signature instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

import typer

from ..services import DroneFleetService

Echo = Callable[..., None]
Confirm = Callable[[str], bool]


class CommandContext:
    """Per-command bundle of collaborators."""

    def __init__(
        self,
        fleet_service: DroneFleetService,
        *,
        echo: Optional[Echo] = None,
        confirm: Optional[Confirm] = None,
        request_exit: Optional[Callable[[], None]] = None,
        roots: Optional[Sequence[Path]] = None,
    ) -> None:
        self.fleet_service = fleet_service
        self._echo = echo or typer.secho
        self._confirm = confirm or typer.confirm
        self._request_exit = request_exit
        # Search roots for relative paths; ``None`` means the default candidates.
        self.roots = roots

    def write(self, message: str, fg: Optional[str] = None) -> None:
        self._echo(message, fg=fg)

    def info(self, message: str) -> None:
        self.write(message, fg=typer.colors.CYAN)

    def success(self, message: str) -> None:
        self.write(message, fg=typer.colors.GREEN)

    def warning(self, message: str) -> None:
        self.write(message, fg=typer.colors.YELLOW)

    def error(self, message: str) -> None:
        self.write(message, fg=typer.colors.RED)

    def confirm(self, question: str) -> bool:
        return bool(self._confirm(question))

    def request_exit(self) -> None:
        if self._request_exit is not None:
            self._request_exit()
