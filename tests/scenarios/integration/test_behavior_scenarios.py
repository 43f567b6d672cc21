"""Scenario-style tests for core reconciliation behaviors."""

from __future__ import annotations

from lesson_reconciler.reconciliation import (
    DatabaseLesson,
    DifferenceField,
    SheetLesson,
    reconcile_lessons,
)


def _alice_in_database() -> DatabaseLesson:
    return DatabaseLesson(
        lesson_id="1",
        student_name="Alice Smith",
        duration_minutes=30,
        teacher_id="t-1",
        teacher_name="Maria Lopez",
        day_of_week=1,
        start_time="15:00",
        subject_id="s-1",
        subject_name="Piano",
        start_date="2024-01-01",
        end_date="2024-06-01",
    )


def _alice_in_sheet(duration_minutes: int = 30) -> SheetLesson:
    return SheetLesson(
        student_name="alice smith",
        duration_minutes=duration_minutes,
        teacher_name="Maria Lopez",
        start_date="2024-01-01",
        subject_name="piano",
        row_number=2,
    )


def test_same_lesson_written_differently_is_matched() -> None:
    result = reconcile_lessons([_alice_in_database()], [_alice_in_sheet()])

    assert len(result.matched) == 1
    assert result.mismatched == ()
    assert result.missing_in_database == ()
    assert result.missing_in_sheet == ()


def test_changed_duration_is_reported_as_single_difference() -> None:
    result = reconcile_lessons([_alice_in_database()], [_alice_in_sheet(duration_minutes=45)])

    assert result.matched == ()
    assert len(result.mismatched) == 1
    mismatch = result.mismatched[0]
    assert [difference.field for difference in mismatch.differences] == [
        DifferenceField.DURATION
    ]
    assert "Duration" in mismatch.descriptions[0]


def test_sheet_student_unknown_to_the_database_is_missing_in_database() -> None:
    bob = SheetLesson(
        student_name="Bob",
        duration_minutes=30,
        teacher_name="Maria Lopez",
        start_date="2024-01-01",
        subject_name="Piano",
        row_number=3,
    )

    result = reconcile_lessons([_alice_in_database()], [_alice_in_sheet(), bob])

    assert result.missing_in_database == (bob,)
    assert len(result.matched) == 1


def test_database_lesson_without_sheet_row_is_missing_in_sheet() -> None:
    alice = _alice_in_database()

    result = reconcile_lessons([alice], [])

    assert result.missing_in_sheet == (alice,)
    assert result.matched == ()
    assert result.mismatched == ()
