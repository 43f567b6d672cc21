"""Results workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from lesson_reconciler.reconciliation import (
    DatabaseLesson,
    ReconciliationResult,
    SheetLesson,
    score_lesson_pair,
)
from lesson_reconciler.template_generation import write_header_row

from .report_models import ReconciliationStatus, RunMetadata

MATCHED_SHEET_NAME = "Matched"
MISMATCHED_SHEET_NAME = "Mismatched"
MISSING_IN_DATABASE_SHEET_NAME = "MissingInDatabase"
MISSING_IN_SHEET_SHEET_NAME = "MissingInSheet"
RUN_INFO_SHEET_NAME = "RunInfo"

_DATABASE_COLUMNS = (
    "LessonID",
    "Student",
    "Duration",
    "Teacher",
    "Subject",
    "StartDate",
    "EndDate",
)
_SHEET_COLUMNS = ("SheetRow", "Student", "Duration", "Teacher", "Subject", "StartDate")

MATCHED_COLUMNS = ("Status",) + _DATABASE_COLUMNS + ("SheetRow",)
MISMATCHED_COLUMNS = (
    ("Status",)
    + _DATABASE_COLUMNS
    + tuple(f"Sheet{name}" for name in _SHEET_COLUMNS if name != "SheetRow")
    + ("SheetRow", "Score", "Differences")
)
MISSING_IN_DATABASE_COLUMNS = ("Status",) + _SHEET_COLUMNS
MISSING_IN_SHEET_COLUMNS = ("Status",) + _DATABASE_COLUMNS


def write_results_workbook(
    output_path: Path | str,
    result: ReconciliationResult,
    run_metadata: RunMetadata,
) -> None:
    """Write one sheet per reconciliation bucket plus a RunInfo sheet."""
    workbook = Workbook()
    matched_sheet = workbook.active
    assert isinstance(matched_sheet, Worksheet)
    matched_sheet.title = MATCHED_SHEET_NAME
    write_header_row(matched_sheet, MATCHED_COLUMNS)
    for pair in result.matched:
        matched_sheet.append(
            [ReconciliationStatus.MATCHED.value]
            + _database_values(pair.database_lesson)
            + [pair.sheet_lesson.row_number]
        )

    mismatched_sheet = _create_sheet(workbook, MISMATCHED_SHEET_NAME, MISMATCHED_COLUMNS)
    for mismatch in result.mismatched:
        mismatched_sheet.append(
            [ReconciliationStatus.MISMATCHED.value]
            + _database_values(mismatch.database_lesson)
            + _sheet_values(mismatch.sheet_lesson)[1:]
            + [
                mismatch.sheet_lesson.row_number,
                round(score_lesson_pair(mismatch.database_lesson, mismatch.sheet_lesson), 2),
                "\n".join(mismatch.descriptions),
            ]
        )
    mismatched_sheet.column_dimensions[get_column_letter(len(MISMATCHED_COLUMNS))].width = 80

    missing_in_database_sheet = _create_sheet(
        workbook, MISSING_IN_DATABASE_SHEET_NAME, MISSING_IN_DATABASE_COLUMNS
    )
    for sheet_lesson in result.missing_in_database:
        missing_in_database_sheet.append(
            [ReconciliationStatus.MISSING_IN_DATABASE.value] + _sheet_values(sheet_lesson)
        )

    missing_in_sheet_sheet = _create_sheet(
        workbook, MISSING_IN_SHEET_SHEET_NAME, MISSING_IN_SHEET_COLUMNS
    )
    for database_lesson in result.missing_in_sheet:
        missing_in_sheet_sheet.append(
            [ReconciliationStatus.MISSING_IN_SHEET.value] + _database_values(database_lesson)
        )

    _write_run_info_sheet(workbook, run_metadata, result)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)


def _create_sheet(workbook: Workbook, title: str, columns: Sequence[str]) -> Worksheet:
    sheet = workbook.create_sheet(title)
    write_header_row(sheet, columns)
    return sheet


def _database_values(lesson: DatabaseLesson) -> list[object]:
    return [
        lesson.lesson_id,
        lesson.student_name,
        lesson.duration_minutes,
        lesson.teacher_name,
        lesson.subject_name,
        lesson.start_date,
        lesson.end_date,
    ]


def _sheet_values(lesson: SheetLesson) -> list[object]:
    return [
        lesson.row_number,
        lesson.student_name,
        lesson.duration_minutes,
        lesson.teacher_name,
        lesson.subject_name,
        lesson.start_date,
    ]


def _write_run_info_sheet(
    workbook: Workbook,
    run_metadata: RunMetadata,
    result: ReconciliationResult,
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("tenant_id", run_metadata.tenant_id),
        ("database_path", str(run_metadata.database_path)),
        ("sheet_path", str(run_metadata.sheet_path)),
        ("output_path", str(run_metadata.output_path)),
        ("active_on", run_metadata.active_on.isoformat()),
        ("database_lessons", result.database_lesson_count),
        ("sheet_lessons", result.sheet_lesson_count),
        ("matched", len(result.matched)),
        ("mismatched", len(result.mismatched)),
        ("missing_in_database", len(result.missing_in_database)),
        ("missing_in_sheet", len(result.missing_in_sheet)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
