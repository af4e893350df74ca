"""Mini README: Resolve user-supplied relative paths against known roots.

Structure:
    * find_project_root - walk upwards looking for the configured marker file.
    * candidate_roots - ordered, de-duplicated search roots.
    * resolve_existing_path - first root under which a file exists.
    * resolve_destination_path - first root whose target directory exists.

The search order is: project root, the configured data directory (when it
exists), current working directory, the package base directory, then the
ancestors of the working and base directories.
When no root matches, the first candidate is used so callers get a clean
"file not found" instead of a resolution error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from ..configuration import get_settings

PACKAGE_BASE_DIRECTORY = Path(__file__).resolve().parent.parent


def _ancestors(start: Path) -> Iterator[Path]:
    current = start
    while current.exists():
        yield current
        if current.parent == current:
            return
        current = current.parent


def find_project_root(marker: Optional[str] = None, starts: Optional[Iterable[Path]] = None) -> Optional[Path]:
    """Return the nearest directory containing ``marker``."""

    marker = marker or get_settings().root_marker
    for start in starts or (PACKAGE_BASE_DIRECTORY, Path.cwd()):
        for directory in _ancestors(Path(start).resolve()):
            if (directory / marker).is_file():
                return directory
    return None


def candidate_roots(marker: Optional[str] = None) -> List[Path]:
    """Return the ordered search roots used to resolve relative paths."""

    roots: List[Path] = []
    seen = set()

    def add(candidate: Optional[Path]) -> None:
        if candidate is None:
            return
        resolved = Path(candidate).resolve()
        key = str(resolved).lower()
        if key not in seen:
            seen.add(key)
            roots.append(resolved)

    cwd = Path.cwd()
    add(find_project_root(marker))
    data_directory = get_settings().data_directory
    if data_directory is not None and data_directory.is_dir():
        add(data_directory)
    add(cwd)
    add(PACKAGE_BASE_DIRECTORY)
    for ancestor in _ancestors(cwd.resolve()):
        add(ancestor)
    for ancestor in _ancestors(PACKAGE_BASE_DIRECTORY):
        add(ancestor)
    return roots


def _clean(raw_path: str) -> str:
    return (raw_path or "").strip().strip('"')


def resolve_existing_path(raw_path: str, roots: Sequence[Path]) -> Path:
    """Resolve an input file path, preferring roots where the file exists."""

    trimmed = _clean(raw_path)
    path = Path(trimmed).expanduser()
    if path.is_absolute():
        return path.resolve()
    for root in roots:
        candidate = (root / path).resolve()
        if candidate.is_file():
            return candidate
    fallback = roots[0] if roots else Path.cwd()
    return (fallback / path).resolve()


def resolve_destination_path(raw_path: str, roots: Sequence[Path]) -> Path:
    """Resolve an output path, preferring roots where its directory already exists."""

    trimmed = _clean(raw_path)
    path = Path(trimmed).expanduser()
    if path.is_absolute():
        return path.resolve()
    for root in roots:
        candidate = (root / path).resolve()
        if candidate.parent.is_dir():
            return candidate
    fallback = roots[0] if roots else Path.cwd()
    return (fallback / path).resolve()
