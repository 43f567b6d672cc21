"""Contract for the live lesson store used by the conflict guard and alignment."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from lesson_reconciler.reconciliation.lesson_records import DatabaseLesson


class LessonStoreError(Exception):
    """Raised when the lesson store cannot answer a lookup or complete a write."""


@dataclass(frozen=True)
class SubjectRef:
    """Subject identifier together with its stored display name."""

    subject_id: str
    name: str


@dataclass(frozen=True)
class AlignmentFields:
    """Fields overwritten on a database lesson when it is aligned with the sheet."""

    student_name: str
    duration_minutes: int
    teacher_id: str
    subject_id: str
    start_date: str | None


class LessonStore(Protocol):
    """Read/write access to the scheduling database for one tenant.

    Teacher lookup is a case-insensitive exact match; subject lookup is
    case-insensitive and may match on a substring. Implementations raise
    ``LessonStoreError`` when the underlying store fails.
    """

    def resolve_teacher_id(self, teacher_name: str) -> str | None: ...

    def resolve_subject(self, subject_name: str) -> SubjectRef | None: ...

    def find_colliding_lessons(
        self, teacher_id: str, day_of_week: int, exclude_lesson_id: str
    ) -> Sequence[DatabaseLesson]: ...

    def find_student_bookings(
        self,
        student_name: str,
        day_of_week: int,
        start_time: str,
        exclude_lesson_id: str,
    ) -> Sequence[DatabaseLesson]: ...

    def persist_aligned_lesson(self, lesson_id: str, fields: AlignmentFields) -> DatabaseLesson: ...
