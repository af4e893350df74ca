"""Mini README: Tests for the candidate-root path resolution helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from dronefleet.configuration import get_settings
from dronefleet.fileio import candidate_roots, resolve_destination_path, resolve_existing_path
from dronefleet.fileio.paths import find_project_root


def test_existing_path_prefers_root_containing_file(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "fleet.csv").write_text("Id\n")

    resolved = resolve_existing_path("fleet.csv", [first, second])

    assert resolved == (second / "fleet.csv").resolve()


def test_existing_path_falls_back_to_first_root(tmp_path: Path) -> None:
    assert resolve_existing_path("missing.csv", [tmp_path]) == (tmp_path / "missing.csv").resolve()


def test_paths_are_trimmed_and_unquoted(tmp_path: Path) -> None:
    target = tmp_path / "fleet.csv"
    target.write_text("Id\n")

    assert resolve_existing_path(f'  "{target}"  ', []) == target.resolve()


def test_destination_prefers_root_with_existing_directory(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    (second / "out").mkdir(parents=True)

    resolved = resolve_destination_path("out/fleet.json", [first, second])

    assert resolved == (second / "out" / "fleet.json").resolve()
    assert resolve_destination_path("new/fleet.json", [first, second]) == (first / "new" / "fleet.json").resolve()


def test_find_project_root_walks_upwards(tmp_path: Path) -> None:
    (tmp_path / "fleet.marker").write_text("")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root("fleet.marker", [nested]) == tmp_path.resolve()
    assert find_project_root("absent.marker", [nested]) is None


def test_candidate_roots_are_unique() -> None:
    roots = candidate_roots()
    keys = [str(root).lower() for root in roots]

    assert len(keys) == len(set(keys))
    assert Path.cwd().resolve() in roots


@pytest.fixture()
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_data_directory_is_searched_after_project_root(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fresh_settings: None
) -> None:
    data_dir = tmp_path / "fleet-data"
    data_dir.mkdir()
    (data_dir / "only-in-data-dir.csv").write_text("Id\n", encoding="utf-8")
    monkeypatch.setenv("DRONEFLEET_DATA_DIRECTORY", str(data_dir))

    roots = candidate_roots()

    assert data_dir.resolve() in roots
    assert roots.index(data_dir.resolve()) <= 1
    assert resolve_existing_path("only-in-data-dir.csv", roots) == (data_dir / "only-in-data-dir.csv").resolve()


def test_missing_data_directory_is_not_a_root(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fresh_settings: None
) -> None:
    monkeypatch.setenv("DRONEFLEET_DATA_DIRECTORY", str(tmp_path / "absent"))

    assert (tmp_path / "absent").resolve() not in candidate_roots()
