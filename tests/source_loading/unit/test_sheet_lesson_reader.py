"""Tests for reading the external lesson spreadsheet."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest
from lesson_reconciler.source_loading import SourceValidationError, read_sheet_lessons
from openpyxl import Workbook

_HEADER = ["Student", "Duration", "Teacher", "StartDate", "Subject"]


def _write_sheet(path: Path, rows: list[list[object]], *, title: str = "Sheet", header=None):
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title
    sheet.append(header or _HEADER)
    for row in rows:
        sheet.append(row)
    workbook.save(path)
    return path


def test_reads_rows_as_free_text(tmp_path: Path) -> None:
    path = _write_sheet(
        tmp_path / "sheet.xlsx",
        [
            ["Alice Smith", 30, "Maria Lopez", "05/01/2024", "Piano"],
            [None, None, None, None, None],
            ["Bob Jones", "45 min", "John Doe", datetime(2024, 2, 1), "Violin"],
            ["  Carla Diaz ", 60.0, None, None, "Theory"],
        ],
    )

    lessons = read_sheet_lessons(path)

    assert [lesson.row_number for lesson in lessons] == [2, 4, 5]
    assert lessons[0].student_name == "Alice Smith"
    assert lessons[0].start_date == "05/01/2024"
    assert lessons[1].duration_minutes == 45
    assert lessons[1].start_date == "2024-02-01"
    assert lessons[2].student_name == "Carla Diaz"
    assert lessons[2].duration_minutes == 60
    assert lessons[2].teacher_name == ""
    assert lessons[2].start_date == ""


def test_unreadable_duration_becomes_zero(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = _write_sheet(
        tmp_path / "sheet.xlsx", [["Alice Smith", "half an hour", "Maria", "", "Piano"]]
    )

    with caplog.at_level(logging.WARNING):
        lessons = read_sheet_lessons(path)

    assert lessons[0].duration_minutes == 0
    assert "Unreadable duration" in caplog.text


def test_missing_student_and_subject_are_logged_not_rejected(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = _write_sheet(tmp_path / "sheet.xlsx", [[None, 30, "Maria", "2024-01-01", None]])

    with caplog.at_level(logging.WARNING):
        lessons = read_sheet_lessons(path)

    assert len(lessons) == 1
    assert "Missing student name in sheet row 2." in caplog.text
    assert "Missing subject in sheet row 2" in caplog.text


def test_columns_may_appear_in_any_order(tmp_path: Path) -> None:
    path = _write_sheet(
        tmp_path / "sheet.xlsx",
        [["Piano", "Alice Smith", 30, "Notes here", "Maria", "2024-01-01"]],
        header=["Subject", "Student", "Duration", "Comment", "Teacher", "StartDate"],
    )

    lessons = read_sheet_lessons(path)

    assert lessons[0].subject_name == "Piano"
    assert lessons[0].teacher_name == "Maria"


def test_named_sheet_is_selected(tmp_path: Path) -> None:
    path = tmp_path / "sheet.xlsx"
    workbook = Workbook()
    workbook.active.title = "Notes"
    lessons_sheet = workbook.create_sheet("Spring term")
    lessons_sheet.append(_HEADER)
    lessons_sheet.append(["Alice Smith", 30, "Maria", "2024-01-01", "Piano"])
    workbook.save(path)

    lessons = read_sheet_lessons(path, "Spring term")

    assert [lesson.student_name for lesson in lessons] == ["Alice Smith"]


def test_missing_named_sheet_is_rejected(tmp_path: Path) -> None:
    path = _write_sheet(tmp_path / "sheet.xlsx", [])

    with pytest.raises(SourceValidationError, match="Sheet 'Autumn' not found"):
        read_sheet_lessons(path, "Autumn")


def test_missing_column_is_rejected(tmp_path: Path) -> None:
    path = _write_sheet(
        tmp_path / "sheet.xlsx", [], header=["Student", "Duration", "Teacher", "StartDate"]
    )

    with pytest.raises(SourceValidationError, match="missing required columns: Subject"):
        read_sheet_lessons(path)


def test_missing_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SourceValidationError, match="Sheet workbook not found"):
        read_sheet_lessons(tmp_path / "absent.xlsx")
