"""Mini README: Immutable records describing a bulk import run.

Structure:
    * ImportIssue - one malformed, duplicate, or file-level problem.
    * FileImportSummary - counters for a single input file.
    * FleetImportResult - aggregate counters plus ordered issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

# Counters are reported as 32-bit values to keep summaries portable.
MAX_ROW_COUNT = 2**31 - 1


@dataclass(frozen=True, slots=True)
class ImportIssue:
    """Problem found while importing; ``line_number`` is 0 for file-level issues."""

    source: str
    line_number: int
    message: str

    def __str__(self) -> str:
        return f"{self.source}:{self.line_number} - {self.message}"


@dataclass(frozen=True, slots=True)
class FileImportSummary:
    """Row counters recorded for one input file."""

    source: str
    total_rows: int = 0
    imported: int = 0
    duplicates: int = 0
    malformed: int = 0


@dataclass(frozen=True, slots=True)
class FleetImportResult:
    """Outcome of importing one or more fleet files."""

    files_processed: int
    total_rows: int
    imported: int
    duplicates: int
    malformed: int
    issues: Tuple[ImportIssue, ...] = ()
    files: Tuple[FileImportSummary, ...] = field(default=())

    @property
    def has_imports(self) -> bool:
        return self.imported > 0
