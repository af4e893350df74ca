"""Mini README: Entry point CLI for the DroneFleet simulator.

This script exposes a Typer CLI with two commands: ``shell`` starts the
interactive fleet console (optionally importing files first) and
``convert`` imports fleet files and writes them back out as CSV or JSON in
one shot. Logging is configured from ``FleetSettings`` before either runs.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import List, Optional

import typer

from dronefleet.configuration import get_settings
from dronefleet.console import FleetConsoleApp
from dronefleet.logging_utils import configure_file_logging, configure_root_logger
from dronefleet.services import DroneFleetService, ImportCancelledError

cli = typer.Typer(help="Simulate and manage a drone fleet from the terminal.")


def _configure_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    configure_root_logger(level)
    logging.getLogger().setLevel(level)
    if settings.log_file is not None:
        configure_file_logging(settings.log_file, level)


@cli.command()
def shell(
    preload: Optional[List[str]] = typer.Option(
        None, "--preload", "-p", help="CSV or JSON file to import before the prompt appears."
    ),
) -> None:
    """Start the interactive fleet shell."""

    _configure_logging()
    app = FleetConsoleApp(DroneFleetService())
    if preload:
        app.execute_line("import " + " ".join(f'"{path}"' for path in preload))
    app.run()


@cli.command()
def convert(
    sources: List[str] = typer.Argument(..., help="CSV or JSON files to import."),
    destination: str = typer.Option(..., "--output", "-o", help="File to write the combined fleet to."),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format (csv or json). Defaults to the destination suffix."
    ),
) -> None:
    """Import fleet files and export the merged fleet in one step."""

    _configure_logging()
    file_format = (output_format or Path(destination).suffix.lstrip(".")).lower()
    if file_format not in ("csv", "json"):
        typer.secho("Unknown export format. Use 'json' or 'csv'.", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    service = DroneFleetService()
    try:
        imported = asyncio.run(service.import_files(sources, threading.Event()))
    except (ImportCancelledError, KeyboardInterrupt):
        typer.secho("Import cancelled.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    if not imported.success:
        typer.secho(imported.error, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    summary = imported.value
    typer.echo(
        f"Imported {summary.imported} of {summary.total_rows} rows "
        f"({summary.duplicates} duplicates, {summary.malformed} malformed)."
    )
    for issue in summary.issues:
        typer.secho(f"  {issue}", fg=typer.colors.YELLOW)

    if file_format == "json":
        exported = asyncio.run(service.export_to_json(destination))
    else:
        exported = asyncio.run(service.export_to_csv(destination))
    if not exported.success:
        typer.secho(exported.error, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.secho(f"Exported fleet to {exported.value}.", fg=typer.colors.GREEN)


if __name__ == "__main__":
    cli()
