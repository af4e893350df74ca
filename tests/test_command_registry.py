"""Mini README: Tests for console command registration and lookup."""

from __future__ import annotations

from typing import Sequence

import pytest

from dronefleet.console import CommandRegistrationError, CommandRegistry, ConsoleCommand, build_command_registry


class _Command(ConsoleCommand):
    def __init__(self, name: str) -> None:
        self.name = name

    async def execute(self, context, arguments: Sequence[str]) -> None:
        return None


def test_lookup_is_case_insensitive_and_includes_aliases() -> None:
    registry = CommandRegistry()
    command = _Command("Status")
    registry.register(command, "st")

    assert registry.get("status") is command
    assert registry.get("ST") is command
    assert registry.get("missing") is None
    assert registry.commands == [command]


def test_duplicate_names_and_aliases_are_fatal() -> None:
    registry = CommandRegistry()
    registry.register(_Command("list"), "ls")

    with pytest.raises(CommandRegistrationError):
        registry.register(_Command("LIST"))
    with pytest.raises(CommandRegistrationError):
        registry.register(_Command("dir"), "ls")
    with pytest.raises(ValueError):
        registry.register(_Command("echo"), "echo")
    assert registry.get("dir") is None


def test_default_registry_wires_every_command() -> None:
    registry = build_command_registry()

    names = [command.name for command in registry.commands]
    assert names == ["help", "import", "export", "list", "stats", "add", "remove", "action", "exit"]
    assert registry.get("?") is registry.get("help")
    assert registry.get("update") is registry.get("action")
    assert registry.get("quit") is registry.get("exit")
