"""Field-level differences between paired lessons."""

from __future__ import annotations

from lesson_reconciler.record_normalization import normalize_date

from .lesson_records import DatabaseLesson, SheetLesson
from .reconciliation_outcomes import DifferenceField, FieldDifference

UNASSIGNED_TEACHER = "Unassigned"
UNSET_DATE = "Not set"


def find_differences(
    database_lesson: DatabaseLesson, sheet_lesson: SheetLesson
) -> list[FieldDifference]:
    """List the fields on which the pair disagrees, in reporting order."""
    differences: list[FieldDifference] = []

    if _lower(database_lesson.student_name) != _lower(sheet_lesson.student_name):
        differences.append(
            FieldDifference(
                field=DifferenceField.STUDENT_NAME,
                database_value=database_lesson.student_name or "",
                sheet_value=sheet_lesson.student_name or "",
            )
        )

    if database_lesson.duration_minutes != sheet_lesson.duration_minutes:
        differences.append(
            FieldDifference(
                field=DifferenceField.DURATION,
                database_value=str(database_lesson.duration_minutes),
                sheet_value=str(sheet_lesson.duration_minutes),
            )
        )

    if _lower(database_lesson.subject_name) != _lower(sheet_lesson.subject_name):
        differences.append(
            FieldDifference(
                field=DifferenceField.SUBJECT,
                database_value=database_lesson.subject_name or "",
                sheet_value=sheet_lesson.subject_name or "",
            )
        )

    database_teacher = database_lesson.teacher_name or UNASSIGNED_TEACHER
    if database_teacher.lower() != _lower(sheet_lesson.teacher_name):
        differences.append(
            FieldDifference(
                field=DifferenceField.TEACHER,
                database_value=database_teacher,
                sheet_value=sheet_lesson.teacher_name or "",
            )
        )

    if normalize_date(database_lesson.start_date) != normalize_date(sheet_lesson.start_date):
        differences.append(
            FieldDifference(
                field=DifferenceField.START_DATE,
                database_value=database_lesson.start_date or UNSET_DATE,
                sheet_value=sheet_lesson.start_date or "",
            )
        )

    return differences


def describe_differences(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> list[str]:
    """Return the difference sentences for the pair."""
    differences = find_differences(database_lesson, sheet_lesson)
    return [difference.description for difference in differences]


def _lower(value: str | None) -> str:
    return (value or "").lower()
