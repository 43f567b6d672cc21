"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from lesson_reconciler.configuration.runtime_settings import Configuration
from lesson_reconciler.reconciliation.lesson_records import SheetLesson
from lesson_reconciler.source_loading.lesson_workbook_store import WorkbookLessonStore


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one reconciliation run."""

    config_path: str
    output_dir: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed reconciliation run."""

    output_path: Path
    matched: int
    mismatched: int
    missing_in_database: int
    missing_in_sheet: int


@dataclass(frozen=True)
class AlignmentRequest:
    """Input contract for aligning one mismatched lesson with the sheet."""

    config_path: str
    lesson_id: str


@dataclass(frozen=True)
class AlignmentOutcome:
    """Output contract for one alignment attempt."""

    lesson_id: str
    success: bool
    message: str


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    active_on: date
    store: WorkbookLessonStore
    sheet_lessons: tuple[SheetLesson, ...]
