"""Reader for the external lesson spreadsheet."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from lesson_reconciler.reconciliation.lesson_records import SheetLesson
from lesson_reconciler.template_generation import SHEET_LESSON_COLUMNS, SHEET_LESSONS_SHEET_NAME

from .cell_values import SourceValidationError, cell_text, read_header_map, read_row, row_is_empty

_LOGGER = logging.getLogger(__name__)

_LEADING_NUMBER_PATTERN = re.compile(r"^\s*(\d+)")


def read_sheet_lessons(
    sheet_path: Path | str, sheet_name: str | None = None
) -> tuple[SheetLesson, ...]:
    """Read every non-empty row of the lesson spreadsheet.

    Rows are kept as free text: an unreadable duration becomes 0 and dates stay
    as written (date-formatted cells are rendered as ISO dates). Only a missing
    file, sheet or header column is an error.
    """
    path = Path(sheet_path)
    if not path.exists():
        raise SourceValidationError(f"Sheet workbook not found: {path}")

    workbook = load_workbook(path, data_only=True)
    sheet = _select_sheet(workbook, sheet_name)
    header_map = read_header_map(sheet, SHEET_LESSON_COLUMNS)

    lessons: list[SheetLesson] = []
    for row_number in range(2, sheet.max_row + 1):
        row_data = read_row(sheet, row_number, header_map)
        if row_is_empty(row_data):
            continue
        lesson = SheetLesson(
            student_name=cell_text(row_data["Student"]),
            duration_minutes=_parse_duration(row_data["Duration"], row_number),
            teacher_name=cell_text(row_data["Teacher"]),
            start_date=cell_text(row_data["StartDate"]),
            subject_name=cell_text(row_data["Subject"]),
            row_number=row_number,
        )
        if not lesson.student_name:
            _LOGGER.warning("Missing student name in sheet row %d.", row_number)
        if not lesson.subject_name:
            _LOGGER.warning(
                "Missing subject in sheet row %d for %s.",
                row_number,
                lesson.student_name or "unnamed student",
            )
        lessons.append(lesson)

    _LOGGER.info("Read %d sheet lessons from %s.", len(lessons), path)
    return tuple(lessons)


def _select_sheet(workbook, sheet_name: str | None) -> Worksheet:
    if sheet_name:
        if sheet_name not in workbook.sheetnames:
            raise SourceValidationError(f"Sheet '{sheet_name}' not found in sheet workbook.")
        sheet = workbook[sheet_name]
    elif SHEET_LESSONS_SHEET_NAME in workbook.sheetnames:
        sheet = workbook[SHEET_LESSONS_SHEET_NAME]
    else:
        sheet = workbook.active
    if sheet is None:
        raise SourceValidationError("Sheet workbook has no active sheet.")
    assert isinstance(sheet, Worksheet)
    return sheet


def _parse_duration(value: object, row_number: int) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return int(value)
    match = _LEADING_NUMBER_PATTERN.match(cell_text(value))
    if match:
        return int(match.group(1))
    _LOGGER.warning("Unreadable duration %r in sheet row %d; using 0.", value, row_number)
    return 0
