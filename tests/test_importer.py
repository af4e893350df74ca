"""Mini README: Tests for the concurrent CSV/JSON fleet importer.

Covers row accounting (imported, duplicate, malformed), header-inclusive
line numbers, file-level failures, de-duplication of input paths,
concurrent multi-file runs and cancellation.
"""

from __future__ import annotations

import asyncio
import json
import threading
from pathlib import Path

import pytest

from dronefleet.common import ResultCode
from dronefleet.fileio import CSV_HEADER, DroneCsvParser
from dronefleet.models import DroneKind
from dronefleet.services import FleetImporter, ImportCancelledError
from dronefleet.storage import DroneRepository


def _write_csv(path: Path, *rows: str) -> Path:
    path.write_text("\n".join([CSV_HEADER, *rows]) + "\n", encoding="utf-8")
    return path


def _import(importer: FleetImporter, *paths: Path, cancel_event: threading.Event = None):
    return asyncio.run(importer.import_files([str(path) for path in paths], cancel_event, roots=[]))


def test_mixed_rows_are_counted_by_outcome(tmp_path: Path) -> None:
    source = _write_csv(
        tmp_path / "fleet.csv",
        "1,Alpha,Delivery,80,false,2,,,",
        "x,Bravo,Survey,70,false,,,,",
        "1,Charlie,Racing,60,false,,,,",
    )
    repository = DroneRepository(shard_count=4)

    result = _import(FleetImporter(repository), source)

    assert result.success
    summary = result.value
    assert (summary.total_rows, summary.imported, summary.duplicates, summary.malformed) == (3, 1, 1, 1)
    assert [issue.line_number for issue in summary.issues] == [3, 4]
    assert summary.issues[0].message == "Invalid Id value."
    assert summary.issues[1].message == "Duplicate drone id 1."
    assert str(summary.issues[0]) == "fleet.csv:3 - Invalid Id value."
    assert repository.get(1).value.name == "Alpha"


def test_blank_lines_are_skipped_but_keep_numbering(tmp_path: Path) -> None:
    source = _write_csv(tmp_path / "gaps.csv", "1,Alpha,Racing,80,false,,,,", "", "2,,Racing,80,false,,,,")

    summary = _import(FleetImporter(DroneRepository(shard_count=2)), source).value

    assert summary.total_rows == 2
    assert summary.issues[0].line_number == 4
    assert summary.issues[0].message == "Name cannot be empty."


def test_domain_validation_failures_count_as_malformed(tmp_path: Path) -> None:
    source = _write_csv(tmp_path / "hot.csv", "1,Hot,Survey,150,false,,,,")

    summary = _import(FleetImporter(DroneRepository(shard_count=2)), source).value

    assert summary.malformed == 1
    assert summary.imported == 0


def test_json_array_import_normalises_keys(tmp_path: Path) -> None:
    source = tmp_path / "fleet.json"
    source.write_text(
        json.dumps(
            [
                {"Id": 1, "Name": "Hauler", "Kind": "Delivery", "BatteryPercent": 90, "LoadKg": 3.5},
                {"id": 2, "name": "Eye", "kind": "survey", "batteryPercent": 75, "photo_count": 4},
                "not an object",
                {"Id": 3, "Name": "Bad", "Kind": "Blimp", "BatteryPercent": 50},
            ]
        ),
        encoding="utf-8",
    )
    repository = DroneRepository(shard_count=2)

    summary = _import(FleetImporter(repository), source).value

    assert (summary.total_rows, summary.imported, summary.malformed) == (4, 2, 2)
    assert [issue.line_number for issue in summary.issues] == [3, 4]
    assert summary.issues[0].message == "Entry is not a JSON object."
    assert summary.issues[1].message.startswith("Invalid drone snapshot.")
    survey = repository.get(2).value
    assert survey.kind is DroneKind.SURVEY
    assert survey.photo_count == 4
    assert repository.get(1).value.current_load_kg == 3.5


def test_single_json_object_is_accepted(tmp_path: Path) -> None:
    source = tmp_path / "one.json"
    source.write_text(json.dumps({"Id": 9, "Name": "Solo", "Kind": 2, "BatteryPercent": 55}), encoding="utf-8")
    repository = DroneRepository(shard_count=2)

    summary = _import(FleetImporter(repository), source).value

    assert summary.imported == 1
    assert repository.get(9).value.kind is DroneKind.RACING


def test_file_level_problems_become_single_issues(tmp_path: Path) -> None:
    missing = tmp_path / "missing.csv"
    unsupported = tmp_path / "fleet.txt"
    unsupported.write_text("hello", encoding="utf-8")
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    blank_json = tmp_path / "blank.json"
    blank_json.write_text("[]", encoding="utf-8")

    summary = _import(
        FleetImporter(DroneRepository(shard_count=2)), missing, unsupported, empty, broken, blank_json
    ).value

    messages = {issue.source: issue.message for issue in summary.issues}
    assert summary.files_processed == 5
    assert summary.total_rows == 0
    assert summary.malformed == 5
    assert messages["missing.csv"] == "File not found."
    assert messages["fleet.txt"] == "Unsupported file type."
    assert messages["empty.csv"] == "File is empty."
    assert messages["broken.json"].startswith("Failed to read file.")
    assert messages["blank.json"] == "JSON file is empty or invalid."
    assert all(issue.line_number == 0 for issue in summary.issues)


def test_paths_are_deduplicated_and_blank_entries_ignored(tmp_path: Path) -> None:
    source = _write_csv(tmp_path / "fleet.csv", "1,Alpha,Racing,80,false,,,,")
    importer = FleetImporter(DroneRepository(shard_count=2))

    result = asyncio.run(importer.import_files([str(source), "  ", str(source)], roots=[]))

    assert result.value.files_processed == 1
    assert result.value.duplicates == 0


def test_no_paths_is_a_validation_failure() -> None:
    importer = FleetImporter(DroneRepository(shard_count=2))

    result = asyncio.run(importer.import_files(["", "   "], roots=[]))

    assert result.code is ResultCode.VALIDATION
    assert result.error == "No file paths were provided."


def test_relative_paths_resolve_against_roots(tmp_path: Path) -> None:
    _write_csv(tmp_path / "fleet.csv", "1,Alpha,Racing,80,false,,,,")
    importer = FleetImporter(DroneRepository(shard_count=2))

    result = asyncio.run(importer.import_files(["fleet.csv"], roots=[tmp_path]))

    assert result.value.imported == 1


def test_concurrent_files_produce_consistent_totals(tmp_path: Path) -> None:
    sources = []
    for index in range(4):
        rows = [f"{index * 100 + row},Drone {row},Racing,50,false,,,," for row in range(50)]
        rows.append(f"{index * 100},Again,Racing,50,false,,,,")
        sources.append(_write_csv(tmp_path / f"batch{index}.csv", *rows))
    repository = DroneRepository(shard_count=8)

    summary = _import(FleetImporter(repository), *sources).value

    assert summary.files_processed == 4
    assert (summary.total_rows, summary.imported, summary.duplicates) == (204, 200, 4)
    assert len(repository) == 200
    for file_summary in summary.files:
        assert file_summary.total_rows == file_summary.imported + file_summary.duplicates + file_summary.malformed
    assert [issue.source for issue in summary.issues] == [f"batch{index}.csv" for index in range(4)]


def test_same_id_across_files_imports_once(tmp_path: Path) -> None:
    first = _write_csv(tmp_path / "a.csv", "5,Alpha,Racing,80,false,,,,")
    second = _write_csv(tmp_path / "b.csv", "5,Bravo,Survey,80,false,,,,")

    summary = _import(FleetImporter(DroneRepository(shard_count=2)), first, second).value

    assert summary.imported == 1
    assert summary.duplicates == 1


def test_pre_cancelled_import_raises(tmp_path: Path) -> None:
    source = _write_csv(tmp_path / "fleet.csv", "1,Alpha,Racing,80,false,,,,")
    cancel_event = threading.Event()
    cancel_event.set()

    with pytest.raises(ImportCancelledError):
        _import(FleetImporter(DroneRepository(shard_count=2)), source, cancel_event=cancel_event)


def test_only_carriage_return_and_line_feed_end_rows(tmp_path: Path) -> None:
    source = tmp_path / "breaks.csv"
    source.write_text(
        f"{CSV_HEADER}\r\n1,A\x0cB,Racing,80,false,,,,\r\nx,C\u2028D,Racing,80,false,,,,\r\n",
        encoding="utf-8",
        newline="",
    )
    repository = DroneRepository(shard_count=2)

    summary = _import(FleetImporter(repository), source).value

    assert (summary.total_rows, summary.imported, summary.malformed) == (2, 1, 1)
    assert [issue.line_number for issue in summary.issues] == [3]
    assert repository.get(1).value.name == "A\x0cB"


class _CancellingParser(DroneCsvParser):
    """Sets the cancel event once a fixed number of rows has been parsed."""

    def __init__(self, cancel_event: threading.Event, after_rows: int) -> None:
        self._cancel_event = cancel_event
        self._after_rows = after_rows
        self.calls = 0

    def parse(self, columns):
        parsed = super().parse(columns)
        self.calls += 1
        if self.calls == self._after_rows:
            self._cancel_event.set()
        return parsed


def test_cancelling_mid_file_stops_before_the_next_row(tmp_path: Path) -> None:
    source = _write_csv(tmp_path / "fleet.csv", *(f"{index},Drone{index},Racing,80,false,,,," for index in range(1, 6)))
    cancel_event = threading.Event()
    parser = _CancellingParser(cancel_event, after_rows=2)
    repository = DroneRepository(shard_count=2)

    with pytest.raises(ImportCancelledError):
        _import(FleetImporter(repository, parser), source, cancel_event=cancel_event)

    assert parser.calls == 2
    assert len(repository) == 2
    assert repository.get(3).success is False
