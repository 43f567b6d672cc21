"""Tests for the reconciliation and alignment run use cases."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from lesson_reconciler.run_execution import (
    AlignmentRequest,
    RunExecutionError,
    RunRequest,
    execute_alignment_run,
    execute_reconciliation_run,
)
from openpyxl import Workbook, load_workbook

_LESSON_HEADER = [
    "ID",
    "Tenant",
    "Student",
    "Duration",
    "TeacherID",
    "DayOfWeek",
    "StartTime",
    "SubjectID",
    "StartDate",
    "EndDate",
]


def _write_sources(tmp_path: Path, *, sheet_rows: list[list[object]]) -> tuple[Path, Path]:
    database_path = tmp_path / "lessons.xlsx"
    workbook = Workbook()
    lessons = workbook.active
    lessons.title = "Lessons"
    lessons.append(_LESSON_HEADER)
    for lesson_id, tenant, student, start_time in (
        ("1", "school-a", "Alice Smith", "15:00"),
        ("2", "school-a", "Bob Jones", "16:00"),
        ("3", "school-b", "Carla Diaz", "17:00"),
    ):
        lessons.append(
            [lesson_id, tenant, student, 30, "t-1", 1, start_time, "s-1", "2024-01-01", None]
        )
    teachers = workbook.create_sheet("Teachers")
    teachers.append(["ID", "Name"])
    teachers.append(["t-1", "Maria Lopez"])
    teachers.append(["t-2", "John Doe"])
    subjects = workbook.create_sheet("Subjects")
    subjects.append(["ID", "Name"])
    subjects.append(["s-1", "Piano"])
    workbook.save(database_path)

    sheet_path = tmp_path / "sheet.xlsx"
    sheet_workbook = Workbook()
    sheet = sheet_workbook.active
    sheet.append(["Student", "Duration", "Teacher", "StartDate", "Subject"])
    for row in sheet_rows:
        sheet.append(row)
    sheet_workbook.save(sheet_path)
    return database_path, sheet_path


def _write_config(tmp_path: Path, **extra: object) -> Path:
    config = {
        "tenant_id": "school-a",
        "database": {"path": "lessons.xlsx"},
        "sheet": {"path": "sheet.xlsx"},
        "reconciliation": {"active_on": "2024-09-01"},
    }
    config.update(extra)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_reconciliation_run_writes_results_next_to_the_sheet(tmp_path: Path) -> None:
    _write_sources(
        tmp_path,
        sheet_rows=[
            ["Alice Smith", 30, "Maria Lopez", "2024-01-01", "Piano"],
            ["Bob Jones", 45, "Maria Lopez", "2024-01-01", "Piano"],
            ["Eve Adams", 30, "Maria Lopez", "2024-01-01", "Piano"],
        ],
    )
    config_path = _write_config(tmp_path)

    outcome = execute_reconciliation_run(RunRequest(config_path=str(config_path)))

    assert outcome.output_path.parent == tmp_path.resolve()
    assert outcome.output_path.name.startswith("sheet-reconciliation-")
    assert outcome.output_path.suffix == ".xlsx"
    assert (outcome.matched, outcome.mismatched) == (1, 1)
    assert (outcome.missing_in_database, outcome.missing_in_sheet) == (1, 0)
    run_info = {
        key: value
        for key, value in load_workbook(outcome.output_path)["RunInfo"].iter_rows(
            values_only=True
        )
    }
    assert run_info["tenant_id"] == "school-a"
    assert run_info["active_on"] == "2024-09-01"


def test_request_output_dir_overrides_configuration(tmp_path: Path) -> None:
    _write_sources(tmp_path, sheet_rows=[])
    config_path = _write_config(tmp_path, results={"output_dir": "configured"})

    configured = execute_reconciliation_run(RunRequest(config_path=str(config_path)))
    requested = execute_reconciliation_run(
        RunRequest(config_path=str(config_path), output_dir=str(tmp_path / "requested"))
    )

    assert configured.output_path.parent == (tmp_path / "configured").resolve()
    assert requested.output_path.parent == (tmp_path / "requested").resolve()
    assert configured.missing_in_sheet == 2


def test_load_failures_are_wrapped(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    with pytest.raises(RunExecutionError, match="Lessons workbook not found"):
        execute_reconciliation_run(RunRequest(config_path=str(config_path)))

    with pytest.raises(RunExecutionError, match="Configuration file not found"):
        execute_reconciliation_run(RunRequest(config_path=str(tmp_path / "absent.yaml")))


def test_alignment_run_rewrites_the_lessons_workbook(tmp_path: Path) -> None:
    database_path, _ = _write_sources(
        tmp_path,
        sheet_rows=[["Bob Jones", 45, "John Doe", "2024-01-01", "Piano"]],
    )
    config_path = _write_config(tmp_path)

    outcome = execute_alignment_run(AlignmentRequest(config_path=str(config_path), lesson_id="2"))

    assert outcome.success
    assert outcome.message == "Lesson successfully aligned with sheet data."
    row = [cell.value for cell in load_workbook(database_path)["Lessons"][3]]
    assert row[:5] == ["2", "school-a", "Bob Jones", 45, "t-2"]

    rerun = execute_reconciliation_run(RunRequest(config_path=str(config_path)))
    assert (rerun.matched, rerun.mismatched) == (1, 0)


def test_alignment_run_reports_blocked_alignment(tmp_path: Path) -> None:
    database_path, _ = _write_sources(
        tmp_path,
        sheet_rows=[["Alice Smith", 90, "Maria Lopez", "2024-01-01", "Piano"]],
    )
    config_path = _write_config(tmp_path)

    outcome = execute_alignment_run(AlignmentRequest(config_path=str(config_path), lesson_id="1"))

    assert not outcome.success
    assert outcome.message == (
        "Cannot align lesson: Changing duration to 90 minutes would overlap with "
        "Bob Jones's lesson."
    )
    assert load_workbook(database_path)["Lessons"]["D2"].value == 30


def test_alignment_run_requires_an_open_mismatch(tmp_path: Path) -> None:
    _write_sources(tmp_path, sheet_rows=[["Alice Smith", 30, "Maria Lopez", "2024-01-01", "Piano"]])
    config_path = _write_config(tmp_path)

    with pytest.raises(RunExecutionError, match="Lesson 1 has no mismatch to align"):
        execute_alignment_run(AlignmentRequest(config_path=str(config_path), lesson_id="1"))
