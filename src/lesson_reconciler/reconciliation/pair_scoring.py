"""Weighted similarity scoring between one database lesson and one sheet lesson."""

from __future__ import annotations

from dataclasses import dataclass

from lesson_reconciler.record_normalization import normalize_date, normalize_name, parse_iso_date

from .lesson_records import DatabaseLesson, SheetLesson

STUDENT_NAME_WEIGHT = 3.0
DURATION_WEIGHT = 2.0
SUBJECT_WEIGHT = 2.0
TEACHER_WEIGHT = 0.5
START_DATE_WEIGHT = 0.5
IN_RANGE_PROXIMITY = 2.0

# Student, duration and subject sum to 7; a candidate also needs some date evidence.
CANDIDATE_MATCH_THRESHOLD = 8.0

# (lower_days, upper_days, score_at_lower, score_at_upper)
_PROXIMITY_BANDS: tuple[tuple[int, int, float, float], ...] = (
    (0, 7, 1.5, 1.0),
    (7, 30, 1.0, 0.5),
    (30, 90, 0.5, 0.0),
)


@dataclass(frozen=True)
class PairScore:
    """Per-signal contributions to one pair score."""

    student_name: float
    duration: float
    subject: float
    teacher: float
    start_date: float
    date_proximity: float

    @property
    def total(self) -> float:
        """Sum of every signal contribution."""
        return (
            self.student_name
            + self.duration
            + self.subject
            + self.teacher
            + self.start_date
            + self.date_proximity
        )


def score_breakdown(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> PairScore:
    """Score each matching signal for the pair independently."""
    pair = (database_lesson, sheet_lesson)
    return PairScore(
        student_name=STUDENT_NAME_WEIGHT if _student_names_match(*pair) else 0.0,
        duration=DURATION_WEIGHT if _durations_match(*pair) else 0.0,
        subject=SUBJECT_WEIGHT if _subjects_match(*pair) else 0.0,
        teacher=TEACHER_WEIGHT if _teachers_match(*pair) else 0.0,
        start_date=START_DATE_WEIGHT if _start_dates_match(*pair) else 0.0,
        date_proximity=date_range_proximity(*pair),
    )


def score_lesson_pair(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> float:
    """Return the combined similarity score for the pair."""
    return score_breakdown(database_lesson, sheet_lesson).total


def is_candidate_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    """Return True when the pair is strong enough to describe the same lesson."""
    return score_lesson_pair(database_lesson, sheet_lesson) >= CANDIDATE_MATCH_THRESHOLD


def is_partial_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    """Return True when the student matches and either duration or subject does too."""
    if not normalize_name(database_lesson.student_name) or not normalize_name(
        sheet_lesson.student_name
    ):
        return False
    if not _student_names_match(database_lesson, sheet_lesson):
        return False
    return _durations_match(database_lesson, sheet_lesson) or _subjects_match(
        database_lesson, sheet_lesson
    )


def date_range_proximity(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> float:
    """Score how close the sheet start date is to the database date range.

    The database range is ``[start_date, end_date)``; a missing end date leaves it
    open. Dates that cannot be read contribute nothing.
    """
    range_start = parse_iso_date(database_lesson.start_date)
    sheet_start = parse_iso_date(normalize_date(sheet_lesson.start_date))
    if range_start is None or sheet_start is None:
        return 0.0
    range_end = parse_iso_date(database_lesson.end_date)
    if range_end is None and database_lesson.end_date:
        return 0.0

    if sheet_start < range_start:
        return _decay_by_distance((range_start - sheet_start).days)
    if range_end is None or sheet_start < range_end:
        return IN_RANGE_PROXIMITY
    return _decay_by_distance((sheet_start - range_end).days)


def _decay_by_distance(days: int) -> float:
    for lower, upper, score_at_lower, score_at_upper in _PROXIMITY_BANDS:
        if days <= upper:
            fraction = (days - lower) / (upper - lower)
            return score_at_lower - fraction * (score_at_lower - score_at_upper)
    return 0.0


def _student_names_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    return normalize_name(database_lesson.student_name) == normalize_name(
        sheet_lesson.student_name
    )


def _durations_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    return database_lesson.duration_minutes == sheet_lesson.duration_minutes


def _subjects_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    if not database_lesson.subject_name or not sheet_lesson.subject_name:
        return False
    return database_lesson.subject_name.lower() == sheet_lesson.subject_name.lower()


def _teachers_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    database_teacher = database_lesson.teacher_name or ""
    return database_teacher.lower() == (sheet_lesson.teacher_name or "").lower()


def _start_dates_match(database_lesson: DatabaseLesson, sheet_lesson: SheetLesson) -> bool:
    return normalize_date(database_lesson.start_date) == normalize_date(sheet_lesson.start_date)
