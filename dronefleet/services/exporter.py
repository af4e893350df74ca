"""Mini README: Serialise the fleet to CSV or JSON files.

Structure:
    * FleetExporter - writes snapshots ordered by id to disk.

Destinations are resolved with the same candidate-root search used by the
importer, except that a root matches when the target's directory already
exists. Missing parent directories are created before writing.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import List, Optional, Sequence

from ..common import OperationResult, ResultCode
from ..fileio import CSV_HEADER, candidate_roots, format_snapshot_row, resolve_destination_path
from ..logging_utils import get_logger
from ..mapping import to_snapshot
from ..models import DroneSnapshot
from ..storage import DroneRepository

LOGGER = get_logger(__name__)


class FleetExporter:
    """Persist the current fleet in the supported flat-file formats."""

    def __init__(self, repository: DroneRepository) -> None:
        if repository is None:
            raise TypeError("repository is required")
        self._repository = repository

    def snapshots(self) -> List[DroneSnapshot]:
        """Return snapshots of every stored drone ordered by id."""

        return [to_snapshot(drone) for drone in sorted(self._repository.list(), key=lambda drone: drone.id)]

    def render_csv(self) -> str:
        lines = [CSV_HEADER]
        lines.extend(format_snapshot_row(snapshot) for snapshot in self.snapshots())
        return "\n".join(lines) + "\n"

    def render_json(self) -> str:
        return json.dumps([snapshot.to_record() for snapshot in self.snapshots()], indent=2)

    async def export_csv(self, destination: str, *, roots: Optional[Sequence[Path]] = None) -> OperationResult[Path]:
        return await self._write(destination, self.render_csv(), roots)

    async def export_json(self, destination: str, *, roots: Optional[Sequence[Path]] = None) -> OperationResult[Path]:
        return await self._write(destination, self.render_json(), roots)

    async def _write(self, destination: str, content: str, roots: Optional[Sequence[Path]]) -> OperationResult[Path]:
        if destination is None or not str(destination).strip():
            return OperationResult.fail("Destination path cannot be empty.", ResultCode.VALIDATION)

        roots = list(roots) if roots is not None else candidate_roots()
        path = resolve_destination_path(str(destination), roots)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        except OSError as error:
            LOGGER.error("Unable to write fleet export to %s: %s", path, error)
            return OperationResult.fail(f"Unable to write {path}: {error}", ResultCode.VALIDATION)
        LOGGER.info("Exported fleet to %s", path)
        return OperationResult.ok(path)
