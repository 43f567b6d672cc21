"""Lesson records compared during reconciliation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DatabaseLesson:  # pylint: disable=too-many-instance-attributes
    """Lesson as stored in the scheduling database.

    ``teacher_id`` is ``None`` for unassigned lessons and ``day_of_week`` /
    ``start_time`` are ``None`` for unscheduled ones. ``start_date`` is inclusive,
    ``end_date`` exclusive, both ``YYYY-MM-DD``.
    """

    lesson_id: str
    student_name: str
    duration_minutes: int
    teacher_id: str | None
    teacher_name: str | None
    day_of_week: int | None
    start_time: str | None
    subject_id: str
    subject_name: str
    start_date: str | None
    end_date: str | None


@dataclass(frozen=True)
class SheetLesson:
    """One row of the external lesson spreadsheet."""

    student_name: str
    duration_minutes: int
    teacher_name: str
    start_date: str
    subject_name: str
    row_number: int | None = None
