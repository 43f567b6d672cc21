"""Guarded overwrite of a database lesson with its sheet counterpart."""

from __future__ import annotations

import logging
from datetime import date

from lesson_reconciler.record_normalization import normalize_date, parse_iso_date
from lesson_reconciler.reconciliation.lesson_records import DatabaseLesson, SheetLesson

from .alignment_outcomes import AlignmentResult, ConflictCheck
from .conflict_guard import check_alignment_conflict, resolve_alignment_targets
from .lesson_store import AlignmentFields, LessonStore, LessonStoreError

_LOGGER = logging.getLogger(__name__)

_WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def apply_alignment(
    database_lesson: DatabaseLesson, sheet_lesson: SheetLesson, store: LessonStore
) -> AlignmentResult:
    """Overwrite the lesson's core fields with the sheet values when it is safe.

    Student name, duration, teacher, subject and start date come from the sheet;
    day of week, start time and end date are kept. The conflict guard is re-run
    here immediately before the write, whatever the caller checked earlier.
    Refusals come back with ``blocked`` set; a failed write does not.
    """
    if sheet_lesson.duration_minutes <= 0:
        return AlignmentResult.refused(
            f'Cannot align lesson: duration "{sheet_lesson.duration_minutes}" from the sheet '
            "is not a positive number of minutes."
        )

    targets = resolve_alignment_targets(sheet_lesson, store)
    if isinstance(targets, ConflictCheck):
        return AlignmentResult.refused(targets.reason or "Cannot resolve sheet lesson.")

    guard = check_alignment_conflict(database_lesson, sheet_lesson, store)
    if guard.blocked:
        return AlignmentResult.refused(f"Cannot align lesson: {guard.reason}")

    start_date = normalize_date(sheet_lesson.start_date)
    if start_date is not None and parse_iso_date(start_date) is None:
        return AlignmentResult.refused(
            f'Cannot align lesson: start date "{sheet_lesson.start_date}" from the sheet '
            "is not a recognizable date."
        )

    booking = _check_student_double_booking(database_lesson, sheet_lesson, start_date, store)
    if booking.blocked:
        _LOGGER.warning(
            "Alignment of lesson %s blocked to prevent a student overlap: %s",
            database_lesson.lesson_id,
            booking.reason,
        )
        return AlignmentResult.refused(
            f"Cannot align lesson: {booking.reason}. "
            "This would create overlapping lessons for the same student."
        )

    fields = AlignmentFields(
        student_name=sheet_lesson.student_name,
        duration_minutes=sheet_lesson.duration_minutes,
        teacher_id=targets.teacher_id,
        subject_id=targets.subject.subject_id,
        start_date=start_date,
    )
    try:
        updated_lesson = store.persist_aligned_lesson(database_lesson.lesson_id, fields)
    except LessonStoreError as exc:
        _LOGGER.error(
            "Failed to persist alignment of lesson %s: %s", database_lesson.lesson_id, exc
        )
        return AlignmentResult.failed(f"Error updating lesson: {exc}")

    _LOGGER.info(
        "Lesson %s aligned with sheet row %s.", updated_lesson.lesson_id, sheet_lesson.row_number
    )
    return AlignmentResult.succeeded(updated_lesson, "Lesson successfully aligned with sheet data.")


def _check_student_double_booking(
    database_lesson: DatabaseLesson,
    sheet_lesson: SheetLesson,
    start_date: str | None,
    store: LessonStore,
) -> ConflictCheck:
    if database_lesson.day_of_week is None or not database_lesson.start_time:
        return ConflictCheck.clear()
    try:
        bookings = store.find_student_bookings(
            sheet_lesson.student_name,
            database_lesson.day_of_week,
            database_lesson.start_time,
            database_lesson.lesson_id,
        )
    except LessonStoreError as exc:
        return ConflictCheck.blocked_by(f"error checking student bookings: {exc}")

    for booking in bookings:
        if _date_ranges_overlap(
            parse_iso_date(start_date),
            parse_iso_date(database_lesson.end_date),
            parse_iso_date(booking.start_date),
            parse_iso_date(booking.end_date),
        ):
            return ConflictCheck.blocked_by(
                f"overlapping lesson found: {booking.student_name} on "
                f"{_weekday_name(booking.day_of_week)} at {booking.start_time} "
                f"({booking.start_date or 'open'} - {booking.end_date or 'open'})"
            )
    return ConflictCheck.clear()


def _date_ranges_overlap(
    first_start: date | None,
    first_end: date | None,
    second_start: date | None,
    second_end: date | None,
) -> bool:
    # Missing bounds are open; ends are exclusive.
    if first_end is not None and second_start is not None and first_end <= second_start:
        return False
    if second_end is not None and first_start is not None and second_end <= first_start:
        return False
    return True


def _weekday_name(day_of_week: int | None) -> str:
    if day_of_week is None or not 0 <= day_of_week < len(_WEEKDAY_NAMES):
        return "an unknown day"
    return _WEEKDAY_NAMES[day_of_week]
