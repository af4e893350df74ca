"""Mini README: Console command contract and name lookup.

Structure:
    * ConsoleCommand - abstract base for shell commands.
    * CommandRegistrationError - raised when a name or alias is taken twice.
    * CommandRegistry - case-insensitive mapping of names and aliases to commands.

Each name maps to exactly one command. Registration conflicts are
configuration mistakes and fail loudly while the shell is being wired.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from ..logging_utils import get_logger
from .context import CommandContext

LOGGER = get_logger(__name__)


class CommandRegistrationError(ValueError):
    """Raised when two commands claim the same keyword."""


class ConsoleCommand(ABC):
    """A single shell command such as ``import`` or ``list``."""

    name: str = ""
    description: str = ""
    usage: str = ""
    help_text: str = ""

    @abstractmethod
    async def execute(self, context: CommandContext, arguments: Sequence[str]) -> None:
        """Run the command with the tokens that followed its name."""


class CommandRegistry:
    """Lookup table from command keywords to command instances."""

    def __init__(self) -> None:
        self._by_keyword: Dict[str, ConsoleCommand] = {}
        self._commands: List[ConsoleCommand] = []

    def register(self, command: ConsoleCommand, *aliases: str) -> None:
        if command is None:
            raise TypeError("command is required")
        keywords = [command.name] + [alias for alias in aliases if alias and alias.strip()]
        normalised = [keyword.strip().lower() for keyword in keywords]
        for keyword in normalised:
            if not keyword:
                raise CommandRegistrationError("Command names cannot be empty.")
            if keyword in self._by_keyword:
                raise CommandRegistrationError(f"Command '{keyword}' is already registered.")
        if len(set(normalised)) != len(normalised):
            raise CommandRegistrationError(f"Command '{command.name}' repeats an alias.")
        for keyword in normalised:
            self._by_keyword[keyword] = command
        self._commands.append(command)
        LOGGER.debug("Registered command '%s' with aliases %s", command.name, list(aliases))

    def get(self, keyword: str) -> Optional[ConsoleCommand]:
        if not keyword:
            return None
        return self._by_keyword.get(keyword.strip().lower())

    @property
    def commands(self) -> List[ConsoleCommand]:
        """Registered commands in registration order, without alias duplicates."""

        return list(self._commands)
