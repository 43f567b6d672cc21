"""Lessons workbook acting as the scheduling database for one tenant."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from lesson_reconciler.alignment.lesson_store import AlignmentFields, LessonStoreError, SubjectRef
from lesson_reconciler.record_normalization import parse_clock_minutes, parse_iso_date
from lesson_reconciler.reconciliation.lesson_records import DatabaseLesson
from lesson_reconciler.template_generation import (
    LESSON_COLUMNS,
    LESSONS_SHEET_NAME,
    SUBJECT_COLUMNS,
    SUBJECTS_SHEET_NAME,
    TEACHER_COLUMNS,
    TEACHERS_SHEET_NAME,
)

from .cell_values import (
    SourceValidationError,
    cell_text,
    optional_cell_text,
    read_header_map,
    read_row,
    row_is_empty,
)

_LOGGER = logging.getLogger(__name__)

UNKNOWN_SUBJECT = "Unknown Subject"


@dataclass(frozen=True)
class _StoredLesson:
    """Lesson together with where it lives in the workbook."""

    row_number: int
    tenant_id: str | None
    lesson: DatabaseLesson


class WorkbookLessonStore:
    """Lesson store backed by a lessons workbook.

    The workbook holds a ``Lessons`` sheet plus ``Teachers`` and ``Subjects``
    lookup sheets. Only lessons of ``tenant_id`` are visible, and only those
    whose end date is absent or not before ``active_on`` count as active.
    """

    def __init__(
        self,
        path: Path,
        *,
        lessons: Sequence[_StoredLesson],
        teachers: Mapping[str, str],
        subjects: Mapping[str, str],
        tenant_id: str | None,
        active_on: date,
    ) -> None:
        self._path = path
        self._lessons = {stored.lesson.lesson_id: stored for stored in lessons}
        self._teachers = dict(teachers)
        self._subjects = dict(subjects)
        self._tenant_id = tenant_id
        self._active_on = active_on

    @classmethod
    def load(
        cls,
        database_path: Path | str,
        *,
        tenant_id: str | None = None,
        active_on: date,
    ) -> WorkbookLessonStore:
        """Read the lessons workbook and validate its structure."""
        path = Path(database_path)
        if not path.exists():
            raise SourceValidationError(f"Lessons workbook not found: {path}")
        workbook = load_workbook(path, data_only=True)
        teachers = _read_lookup(_require_sheet(workbook, TEACHERS_SHEET_NAME), TEACHER_COLUMNS)
        subjects = _read_lookup(_require_sheet(workbook, SUBJECTS_SHEET_NAME), SUBJECT_COLUMNS)
        lessons = _read_lessons(_require_sheet(workbook, LESSONS_SHEET_NAME), teachers, subjects)
        _LOGGER.info(
            "Loaded %d lessons, %d teachers and %d subjects from %s.",
            len(lessons),
            len(teachers),
            len(subjects),
            path,
        )
        return cls(
            path,
            lessons=lessons,
            teachers=teachers,
            subjects=subjects,
            tenant_id=tenant_id,
            active_on=active_on,
        )

    def fetch_database_lessons(self) -> tuple[DatabaseLesson, ...]:
        """Return the active lessons of the configured tenant in workbook order."""
        return tuple(stored.lesson for stored in self._active_lessons())

    def resolve_teacher_id(self, teacher_name: str) -> str | None:
        wanted = (teacher_name or "").strip().lower()
        if not wanted:
            return None
        for teacher_id, name in self._teachers.items():
            if name.lower() == wanted:
                return teacher_id
        return None

    def resolve_subject(self, subject_name: str) -> SubjectRef | None:
        wanted = (subject_name or "").strip().lower()
        if not wanted:
            return None
        for subject_id, name in self._subjects.items():
            if name.lower() == wanted:
                return SubjectRef(subject_id=subject_id, name=name)
        for subject_id, name in self._subjects.items():
            if wanted in name.lower():
                return SubjectRef(subject_id=subject_id, name=name)
        return None

    def find_colliding_lessons(
        self, teacher_id: str, day_of_week: int, exclude_lesson_id: str
    ) -> list[DatabaseLesson]:
        return [
            stored.lesson
            for stored in self._active_lessons()
            if stored.lesson.teacher_id == teacher_id
            and stored.lesson.day_of_week == day_of_week
            and stored.lesson.lesson_id != exclude_lesson_id
        ]

    def find_student_bookings(
        self,
        student_name: str,
        day_of_week: int,
        start_time: str,
        exclude_lesson_id: str,
    ) -> list[DatabaseLesson]:
        wanted_name = (student_name or "").strip().lower()
        wanted_minutes = parse_clock_minutes(start_time)
        return [
            stored.lesson
            for stored in self._active_lessons()
            if stored.lesson.lesson_id != exclude_lesson_id
            and stored.lesson.student_name.strip().lower() == wanted_name
            and stored.lesson.day_of_week == day_of_week
            and parse_clock_minutes(stored.lesson.start_time) == wanted_minutes
        ]

    def persist_aligned_lesson(self, lesson_id: str, fields: AlignmentFields) -> DatabaseLesson:
        stored = self._lessons.get(lesson_id)
        if stored is None or not self._is_visible(stored):
            raise LessonStoreError(f"Lesson {lesson_id} not found.")
        if fields.teacher_id not in self._teachers:
            raise LessonStoreError(f"Teacher {fields.teacher_id} not found.")
        if fields.subject_id not in self._subjects:
            raise LessonStoreError(f"Subject {fields.subject_id} not found.")
        if fields.duration_minutes <= 0:
            raise LessonStoreError(
                f"Duration {fields.duration_minutes} must be a positive whole number of minutes."
            )

        updated = replace(
            stored.lesson,
            student_name=fields.student_name,
            duration_minutes=fields.duration_minutes,
            teacher_id=fields.teacher_id,
            teacher_name=self._teachers[fields.teacher_id],
            subject_id=fields.subject_id,
            subject_name=self._subjects[fields.subject_id],
            start_date=fields.start_date,
        )
        self._write_row(stored.row_number, updated)
        self._lessons[lesson_id] = replace(stored, lesson=updated)
        return updated

    def _active_lessons(self) -> list[_StoredLesson]:
        return [
            stored
            for stored in self._lessons.values()
            if self._is_visible(stored) and _is_active(stored.lesson, self._active_on)
        ]

    def _is_visible(self, stored: _StoredLesson) -> bool:
        return self._tenant_id is None or stored.tenant_id == self._tenant_id

    def _write_row(self, row_number: int, lesson: DatabaseLesson) -> None:
        try:
            workbook = load_workbook(self._path)
            sheet = workbook[LESSONS_SHEET_NAME]
            header_map = read_header_map(sheet, LESSON_COLUMNS)
            stored_id = cell_text(sheet.cell(row=row_number, column=header_map["ID"]).value)
            if stored_id != lesson.lesson_id:
                raise LessonStoreError(
                    f"Lessons workbook changed on disk; row {row_number} no longer holds "
                    f"lesson {lesson.lesson_id}."
                )
            values = {
                "Student": lesson.student_name,
                "Duration": lesson.duration_minutes,
                "TeacherID": lesson.teacher_id,
                "SubjectID": lesson.subject_id,
                "StartDate": lesson.start_date,
            }
            for name, value in values.items():
                sheet.cell(row=row_number, column=header_map[name]).value = value
            workbook.save(self._path)
        except (OSError, KeyError, SourceValidationError) as exc:
            raise LessonStoreError(f"Could not write lessons workbook: {exc}") from exc


def _is_active(lesson: DatabaseLesson, active_on: date) -> bool:
    end_date = parse_iso_date(lesson.end_date)
    return end_date is None or end_date >= active_on


def _require_sheet(workbook, name: str) -> Worksheet:
    if name not in workbook.sheetnames:
        raise SourceValidationError(f"Lessons workbook is missing the '{name}' sheet.")
    sheet = workbook[name]
    assert isinstance(sheet, Worksheet)
    return sheet


def _read_lookup(sheet: Worksheet, columns: Sequence[str]) -> dict[str, str]:
    header_map = read_header_map(sheet, columns)
    entries: dict[str, str] = {}
    for row_number in range(2, sheet.max_row + 1):
        row_data = read_row(sheet, row_number, header_map)
        if row_is_empty(row_data):
            continue
        entry_id = _require_text(row_data["ID"], sheet.title, "ID", row_number)
        if entry_id in entries:
            raise SourceValidationError(
                f"Duplicate ID '{entry_id}' in sheet '{sheet.title}' (row {row_number})."
            )
        entries[entry_id] = _require_text(row_data["Name"], sheet.title, "Name", row_number)
    return entries


def _read_lessons(
    sheet: Worksheet, teachers: Mapping[str, str], subjects: Mapping[str, str]
) -> list[_StoredLesson]:
    header_map = read_header_map(sheet, LESSON_COLUMNS)
    lessons: list[_StoredLesson] = []
    seen_ids: set[str] = set()
    for row_number in range(2, sheet.max_row + 1):
        row_data = read_row(sheet, row_number, header_map)
        if row_is_empty(row_data):
            continue
        lesson_id = _require_text(row_data["ID"], sheet.title, "ID", row_number)
        if lesson_id in seen_ids:
            raise SourceValidationError(f"Duplicate lesson ID '{lesson_id}' (row {row_number}).")
        seen_ids.add(lesson_id)

        teacher_id = optional_cell_text(row_data["TeacherID"])
        subject_id = cell_text(row_data["SubjectID"])
        lesson = DatabaseLesson(
            lesson_id=lesson_id,
            student_name=cell_text(row_data["Student"]),
            duration_minutes=_parse_duration(row_data["Duration"], row_number),
            teacher_id=teacher_id,
            teacher_name=teachers.get(teacher_id) if teacher_id else None,
            day_of_week=_parse_day_of_week(row_data["DayOfWeek"], row_number),
            start_time=_parse_start_time(row_data["StartTime"], row_number),
            subject_id=subject_id,
            subject_name=subjects.get(subject_id, UNKNOWN_SUBJECT),
            start_date=_parse_date(row_data["StartDate"], "StartDate", row_number),
            end_date=_parse_date(row_data["EndDate"], "EndDate", row_number),
        )
        lessons.append(
            _StoredLesson(
                row_number=row_number,
                tenant_id=optional_cell_text(row_data["Tenant"]),
                lesson=lesson,
            )
        )
    return lessons


def _parse_duration(value: object, row_number: int) -> int:
    if isinstance(value, bool):
        raise SourceValidationError(f"Row {row_number}: Duration must be a whole number.")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value <= 0:
        raise SourceValidationError(
            f"Row {row_number}: Duration must be a positive whole number of minutes."
        )
    return value


def _parse_day_of_week(value: object, row_number: int) -> int | None:
    text = cell_text(value)
    if not text:
        return None
    if not text.isdigit() or not 0 <= int(text) <= 6:
        raise SourceValidationError(
            f"Row {row_number}: DayOfWeek must be between 0 (Sunday) and 6 (Saturday)."
        )
    return int(text)


def _parse_start_time(value: object, row_number: int) -> str | None:
    text = cell_text(value)
    if not text:
        return None
    if parse_clock_minutes(text) is None:
        raise SourceValidationError(f"Row {row_number}: StartTime '{text}' is not HH:MM.")
    return text


def _parse_date(value: object, column_name: str, row_number: int) -> str | None:
    text = cell_text(value)
    if not text:
        return None
    if parse_iso_date(text) is None:
        raise SourceValidationError(
            f"Row {row_number}: {column_name} '{text}' is not a YYYY-MM-DD date."
        )
    return text


def _require_text(value: object, sheet_title: str, column_name: str, row_number: int) -> str:
    text = cell_text(value)
    if not text:
        raise SourceValidationError(
            f"Sheet '{sheet_title}' row {row_number}: column '{column_name}' is required."
        )
    return text
