"""Scheduling-collision guard run before a lesson is aligned with the sheet."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lesson_reconciler.record_normalization import parse_clock_minutes
from lesson_reconciler.reconciliation.lesson_records import DatabaseLesson, SheetLesson

from .alignment_outcomes import ConflictCheck
from .lesson_store import LessonStore, LessonStoreError, SubjectRef

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentTargets:
    """Database identifiers the sheet lesson's teacher and subject resolve to."""

    teacher_id: str
    subject: SubjectRef


def resolve_alignment_targets(
    sheet_lesson: SheetLesson, store: LessonStore
) -> AlignmentTargets | ConflictCheck:
    """Resolve the sheet teacher and subject names, or explain why they cannot be."""
    try:
        teacher_id = store.resolve_teacher_id(sheet_lesson.teacher_name)
    except LessonStoreError as exc:
        return ConflictCheck.blocked_by(f"Error finding teachers: {exc}")
    if teacher_id is None:
        return ConflictCheck.blocked_by(
            f'Teacher "{sheet_lesson.teacher_name}" from the sheet was not found in the database.'
        )

    try:
        subject = store.resolve_subject(sheet_lesson.subject_name)
    except LessonStoreError as exc:
        return ConflictCheck.blocked_by(f"Error finding subject: {exc}")
    if subject is None:
        return ConflictCheck.blocked_by(
            f'Subject "{sheet_lesson.subject_name}" from the sheet was not found in the database.'
        )
    return AlignmentTargets(teacher_id=teacher_id, subject=subject)


def check_alignment_conflict(
    database_lesson: DatabaseLesson, sheet_lesson: SheetLesson, store: LessonStore
) -> ConflictCheck:
    """Decide whether aligning the lesson would double-book its teacher.

    Only a duration change on the same teacher can collide: the lesson keeps its
    day and start time, and a different teacher has not been checked against this
    slot at all.
    """
    targets = resolve_alignment_targets(sheet_lesson, store)
    if isinstance(targets, ConflictCheck):
        return targets

    if (
        database_lesson.teacher_id is None
        or database_lesson.day_of_week is None
        or not database_lesson.start_time
    ):
        return ConflictCheck.clear()
    if database_lesson.teacher_id != targets.teacher_id:
        return ConflictCheck.clear()
    if database_lesson.duration_minutes == sheet_lesson.duration_minutes:
        return ConflictCheck.clear()

    start_minutes = parse_clock_minutes(database_lesson.start_time)
    if start_minutes is None:
        return ConflictCheck.blocked_by(
            f'Cannot read start time "{database_lesson.start_time}" of lesson '
            f"{database_lesson.lesson_id}."
        )
    end_minutes = start_minutes + sheet_lesson.duration_minutes

    try:
        neighbours = store.find_colliding_lessons(
            targets.teacher_id, database_lesson.day_of_week, database_lesson.lesson_id
        )
    except LessonStoreError as exc:
        return ConflictCheck.blocked_by(f"Error checking conflicts: {exc}")

    for neighbour in neighbours:
        neighbour_start = parse_clock_minutes(neighbour.start_time)
        if neighbour_start is None:
            continue
        neighbour_end = neighbour_start + neighbour.duration_minutes
        if start_minutes < neighbour_end and end_minutes > neighbour_start:
            _LOGGER.info(
                "Alignment of lesson %s blocked by overlap with lesson %s.",
                database_lesson.lesson_id,
                neighbour.lesson_id,
            )
            return ConflictCheck.blocked_by(
                f"Changing duration to {sheet_lesson.duration_minutes} minutes would overlap "
                f"with {neighbour.student_name}'s lesson."
            )
    return ConflictCheck.clear()
