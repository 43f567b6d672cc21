"""Reconciliation outcome entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .lesson_records import DatabaseLesson, SheetLesson


class DifferenceField(str, Enum):
    """Lesson fields compared between database and sheet."""

    STUDENT_NAME = "student_name"
    DURATION = "duration"
    SUBJECT = "subject"
    TEACHER = "teacher"
    START_DATE = "start_date"


_FIELD_LABELS = {
    DifferenceField.STUDENT_NAME: "Student name",
    DifferenceField.DURATION: "Duration",
    DifferenceField.SUBJECT: "Subject",
    DifferenceField.TEACHER: "Teacher",
    DifferenceField.START_DATE: "Start date",
}


@dataclass(frozen=True)
class FieldDifference:
    """Disagreement between database and sheet for one lesson field."""

    field: DifferenceField
    database_value: str
    sheet_value: str

    @property
    def description(self) -> str:
        """Plain-language sentence naming both values."""
        return (
            f'{_FIELD_LABELS[self.field]} mismatch: "{self.database_value}" in database '
            f'vs "{self.sheet_value}" in sheet'
        )


@dataclass(frozen=True)
class MatchedPair:
    """Database lesson and sheet lesson that agree on every compared field."""

    database_lesson: DatabaseLesson
    sheet_lesson: SheetLesson


@dataclass(frozen=True)
class MismatchedPair:
    """Database lesson paired with a sheet lesson that differs in some fields."""

    database_lesson: DatabaseLesson
    sheet_lesson: SheetLesson
    differences: tuple[FieldDifference, ...]

    @property
    def descriptions(self) -> tuple[str, ...]:
        """Return the difference sentences in reporting order."""
        return tuple(difference.description for difference in self.differences)


@dataclass(frozen=True)
class ReconciliationResult:
    """Partition of both lesson lists into four disjoint buckets."""

    matched: tuple[MatchedPair, ...]
    mismatched: tuple[MismatchedPair, ...]
    missing_in_database: tuple[SheetLesson, ...]
    missing_in_sheet: tuple[DatabaseLesson, ...]

    @property
    def database_lesson_count(self) -> int:
        """Number of database lessons accounted for across all buckets."""
        return len(self.matched) + len(self.mismatched) + len(self.missing_in_sheet)

    @property
    def sheet_lesson_count(self) -> int:
        """Number of sheet lessons accounted for across all buckets."""
        return len(self.matched) + len(self.mismatched) + len(self.missing_in_database)
