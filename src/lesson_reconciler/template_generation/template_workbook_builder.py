"""Blank source workbook generation."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .constants import (
    DATABASE_TEMPLATE_FILENAME,
    LESSON_COLUMNS,
    LESSONS_SHEET_NAME,
    SHEET_LESSON_COLUMNS,
    SHEET_LESSONS_SHEET_NAME,
    SHEET_TEMPLATE_FILENAME,
    SUBJECT_COLUMNS,
    SUBJECTS_SHEET_NAME,
    TEACHER_COLUMNS,
    TEACHERS_SHEET_NAME,
)


def generate_source_templates(output_dir: Path | str) -> tuple[Path, Path]:
    """Create empty lessons and sheet workbooks with their header rows.

    Args:
      output_dir: Directory receiving ``lessons.xlsx`` and ``sheet.xlsx``.

    Returns:
      The resolved paths of the lessons workbook and the sheet workbook.

    Raises:
      FileExistsError: If either workbook already exists.
      OSError: If writing a workbook fails.
    """
    destination = Path(output_dir)
    database_path = destination / DATABASE_TEMPLATE_FILENAME
    sheet_path = destination / SHEET_TEMPLATE_FILENAME
    for path in (database_path, sheet_path):
        if path.exists():
            raise FileExistsError(f"Template workbook already exists: {path.resolve()}")
    destination.mkdir(parents=True, exist_ok=True)

    database_workbook = Workbook()
    _first_sheet(database_workbook, LESSONS_SHEET_NAME, LESSON_COLUMNS)
    write_header_row(database_workbook.create_sheet(TEACHERS_SHEET_NAME), TEACHER_COLUMNS)
    write_header_row(database_workbook.create_sheet(SUBJECTS_SHEET_NAME), SUBJECT_COLUMNS)
    database_workbook.save(database_path)

    sheet_workbook = Workbook()
    _first_sheet(sheet_workbook, SHEET_LESSONS_SHEET_NAME, SHEET_LESSON_COLUMNS)
    sheet_workbook.save(sheet_path)

    return database_path.resolve(), sheet_path.resolve()


def write_header_row(sheet: Worksheet, columns: Sequence[str]) -> None:
    """Write styled column names into row 1 of ``sheet``."""
    for column_index, name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _first_sheet(workbook: Workbook, title: str, columns: Sequence[str]) -> None:
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = title
    write_header_row(sheet, columns)
