"""Mini README: Concurrent bulk import of fleet files.

Structure:
    * ImportCancelledError - raised when the caller cancels an import.
    * FleetImporter - resolves paths, fans out one worker per file, and
      aggregates counters and issues into a ``FleetImportResult``.

Each file is read and processed on a worker thread scheduled through
``asyncio.to_thread`` so several files progress at once. Rows within a file
are handled strictly in order, and every worker keeps its own counters which
are merged under a lock when the file completes. Row-level problems become
``ImportIssue`` entries; I/O and decoding failures collapse into a single
file-level issue. The cancellation event is checked between rows, never in
the middle of one.
"""

from __future__ import annotations

import asyncio
import json
import re
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from ..common import OperationResult, ResultCode
from ..fileio import DroneCsvParser, candidate_roots, resolve_existing_path, tokenize_csv_line
from ..logging_utils import get_logger
from ..mapping import to_drone
from ..models import (
    MAX_ROW_COUNT,
    SNAPSHOT_COLUMNS,
    DroneSnapshot,
    FileImportSummary,
    FleetImportResult,
    ImportIssue,
)
from ..storage import DroneRepository

LOGGER = get_logger(__name__)

# Only CR and LF end a CSV line.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_JSON_KEYS = {column.lower(): column for column in SNAPSHOT_COLUMNS}


class ImportCancelledError(Exception):
    """Raised when an import is cancelled; partial results are discarded."""


class _FileTally:
    """Counters owned by a single file worker."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.total_rows = 0
        self.imported = 0
        self.duplicates = 0
        self.malformed = 0
        self.issues: List[ImportIssue] = []

    def row_issue(self, line_number: int, message: str, *, duplicate: bool = False) -> None:
        if duplicate:
            self.duplicates += 1
        else:
            self.malformed += 1
        self.issues.append(ImportIssue(self.source, line_number, message))

    def file_issue(self, message: str) -> None:
        self.malformed += 1
        self.issues.append(ImportIssue(self.source, 0, message))

    def summary(self) -> FileImportSummary:
        return FileImportSummary(
            source=self.source,
            total_rows=self.total_rows,
            imported=self.imported,
            duplicates=self.duplicates,
            malformed=self.malformed,
        )


class _ImportAggregate:
    """Thread-safe accumulation of per-file tallies."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tallies: List[_FileTally] = []

    def merge(self, tally: _FileTally) -> None:
        with self._lock:
            self._tallies.append(tally)

    def build(self) -> FleetImportResult:
        with self._lock:
            tallies = list(self._tallies)

        def clamp(value: int) -> int:
            return min(MAX_ROW_COUNT, value)

        issues = sorted(
            (issue for tally in tallies for issue in tally.issues),
            key=lambda issue: (issue.source.lower(), issue.line_number),
        )
        files = sorted((tally.summary() for tally in tallies), key=lambda item: item.source.lower())
        return FleetImportResult(
            files_processed=len(tallies),
            total_rows=clamp(sum(tally.total_rows for tally in tallies)),
            imported=clamp(sum(tally.imported for tally in tallies)),
            duplicates=clamp(sum(tally.duplicates for tally in tallies)),
            malformed=clamp(sum(tally.malformed for tally in tallies)),
            issues=tuple(issues),
            files=tuple(files),
        )


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "row"
        parts.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "Invalid drone snapshot. " + "; ".join(parts)


def _normalise_keys(record: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase or snake_case keys onto the file-format column names."""

    normalised: Dict[str, Any] = {}
    for key, value in record.items():
        lookup = str(key).replace("_", "").lower()
        normalised[_JSON_KEYS.get(lookup, key)] = value
    return normalised


class FleetImporter:
    """Import CSV and JSON fleet files into a ``DroneRepository``."""

    def __init__(self, repository: DroneRepository, parser: Optional[DroneCsvParser] = None) -> None:
        if repository is None:
            raise TypeError("repository is required")
        self._repository = repository
        self._parser = parser or DroneCsvParser()

    @staticmethod
    def resolve_paths(file_paths: Iterable[str], roots: Optional[Sequence[Path]] = None) -> List[Path]:
        """Resolve and de-duplicate (case-insensitively) the requested files."""

        roots = list(roots) if roots is not None else candidate_roots()
        resolved: List[Path] = []
        seen = set()
        for raw_path in file_paths:
            if raw_path is None or not str(raw_path).strip():
                continue
            path = resolve_existing_path(str(raw_path), roots)
            key = str(path).lower()
            if key in seen:
                continue
            seen.add(key)
            resolved.append(path)
        return resolved

    async def import_files(
        self,
        file_paths: Iterable[str],
        cancel_event: Optional[threading.Event] = None,
        *,
        roots: Optional[Sequence[Path]] = None,
    ) -> OperationResult[FleetImportResult]:
        """Import every file concurrently and return the aggregated result."""

        if file_paths is None:
            raise TypeError("file_paths is required")
        files = self.resolve_paths(file_paths, roots)
        if not files:
            return OperationResult.fail("No file paths were provided.", ResultCode.VALIDATION)

        cancel_event = cancel_event or threading.Event()
        aggregate = _ImportAggregate()
        LOGGER.info("Importing %s file(s): %s", len(files), ", ".join(path.name for path in files))

        workers = [asyncio.to_thread(self._import_file, path, aggregate, cancel_event) for path in files]
        try:
            await asyncio.gather(*workers)
        except (asyncio.CancelledError, ImportCancelledError):
            cancel_event.set()
            LOGGER.warning("Import cancelled; partial results discarded")
            raise

        result = aggregate.build()
        LOGGER.info(
            "Import finished: files=%s rows=%s imported=%s duplicates=%s malformed=%s",
            result.files_processed,
            result.total_rows,
            result.imported,
            result.duplicates,
            result.malformed,
        )
        for issue in result.issues:
            LOGGER.warning("Import issue %s", issue)
        return OperationResult.ok(result)

    def _import_file(self, path: Path, aggregate: _ImportAggregate, cancel_event: threading.Event) -> None:
        self._check_cancelled(cancel_event)
        tally = _FileTally(path.name)
        try:
            if not path.is_file():
                tally.file_issue("File not found.")
                return

            extension = path.suffix.lower()
            try:
                if extension == ".csv":
                    self._import_csv(path, tally, cancel_event)
                elif extension == ".json":
                    self._import_json(path, tally, cancel_event)
                else:
                    tally.file_issue("Unsupported file type.")
            except ImportCancelledError:
                raise
            except Exception as error:
                LOGGER.exception("Failed to read %s", path)
                tally.file_issue(f"Failed to read file. {error}")
        finally:
            aggregate.merge(tally)

    @staticmethod
    def _check_cancelled(cancel_event: threading.Event) -> None:
        if cancel_event.is_set():
            raise ImportCancelledError("Import was cancelled.")

    def _import_csv(self, path: Path, tally: _FileTally, cancel_event: threading.Event) -> None:
        with path.open(encoding="utf-8-sig", newline="") as handle:
            lines = _LINE_BREAK.split(handle.read())
        if lines and lines[-1] == "":
            lines.pop()
        if not lines:
            tally.file_issue("File is empty.")
            return

        # Line 1 is the header and is skipped without validation.
        for line_number, raw in enumerate(lines[1:], start=2):
            self._check_cancelled(cancel_event)
            if not raw.strip():
                continue
            tally.total_rows += 1
            parsed = self._parser.parse(tokenize_csv_line(raw))
            if not parsed.success:
                tally.row_issue(line_number, parsed.error or "Malformed row.")
                continue
            self._store_snapshot(parsed.value, line_number, tally)

    def _import_json(self, path: Path, tally: _FileTally, cancel_event: threading.Event) -> None:
        payload = json.loads(path.read_text(encoding="utf-8-sig") or "null")
        if isinstance(payload, dict):
            records: List[Any] = [payload]
        elif isinstance(payload, list) and payload:
            records = payload
        else:
            tally.file_issue("JSON file is empty or invalid.")
            return

        for index, record in enumerate(records, start=1):
            self._check_cancelled(cancel_event)
            tally.total_rows += 1
            if not isinstance(record, dict):
                tally.row_issue(index, "Entry is not a JSON object.")
                continue
            try:
                snapshot = DroneSnapshot.model_validate(_normalise_keys(record))
            except ValidationError as error:
                tally.row_issue(index, _describe_validation_error(error))
                continue
            self._store_snapshot(snapshot, index, tally)

    def _store_snapshot(self, snapshot: DroneSnapshot, line_number: int, tally: _FileTally) -> None:
        built = to_drone(snapshot)
        if not built.success:
            tally.row_issue(line_number, built.error or "Invalid drone snapshot.")
            return

        added = self._repository.add(built.value)
        if added.success:
            tally.imported += 1
        elif added.code is ResultCode.DUPLICATE_KEY:
            tally.row_issue(line_number, f"Duplicate drone id {snapshot.id}.", duplicate=True)
        else:
            tally.row_issue(line_number, added.error or "Failed to store drone.")
