"""One-to-one matching of database lessons against sheet lessons."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .difference_reporting import find_differences
from .lesson_records import DatabaseLesson, SheetLesson
from .pair_scoring import CANDIDATE_MATCH_THRESHOLD, is_partial_match, score_lesson_pair
from .reconciliation_outcomes import MatchedPair, MismatchedPair, ReconciliationResult

_LOGGER = logging.getLogger(__name__)


@dataclass
class _MatchingState:
    """Mutable collector for claims and emitted outcomes."""

    matched: list[MatchedPair]
    mismatched: list[MismatchedPair]
    claimed_database_indices: set[int]
    claimed_sheet_indices: set[int]


def reconcile_lessons(
    database_lessons: Sequence[DatabaseLesson],
    sheet_lessons: Sequence[SheetLesson],
    *,
    logger: logging.Logger | None = None,
) -> ReconciliationResult:
    """Pair database lessons with sheet lessons and classify every lesson once.

    Database lessons with an unambiguous, high-scoring counterpart claim it first,
    so a weaker candidate cannot take a sheet row a stronger one also wants.
    Sheet rows left over are offered to unclaimed database lessons of the same
    student as a looser second pass before being reported missing.
    """
    log = logger or _LOGGER
    valid_database_lessons = [
        lesson for lesson in database_lessons if _has_student_name(lesson.student_name)
    ]
    valid_sheet_lessons = [
        lesson for lesson in sheet_lessons if _has_student_name(lesson.student_name)
    ]
    _log_dropped(log, "database", len(database_lessons), len(valid_database_lessons))
    _log_dropped(log, "sheet", len(sheet_lessons), len(valid_sheet_lessons))

    state = _MatchingState(
        matched=[],
        mismatched=[],
        claimed_database_indices=set(),
        claimed_sheet_indices=set(),
    )

    for database_index in _rank_by_best_candidate_score(
        valid_database_lessons, valid_sheet_lessons
    ):
        _claim_best_candidate(
            database_index=database_index,
            database_lessons=valid_database_lessons,
            sheet_lessons=valid_sheet_lessons,
            state=state,
            log=log,
        )

    missing_in_database = _claim_partial_matches(
        database_lessons=valid_database_lessons,
        sheet_lessons=valid_sheet_lessons,
        state=state,
    )
    missing_in_sheet = [
        lesson
        for index, lesson in enumerate(valid_database_lessons)
        if index not in state.claimed_database_indices
    ]

    result = ReconciliationResult(
        matched=tuple(state.matched),
        mismatched=tuple(state.mismatched),
        missing_in_database=tuple(missing_in_database),
        missing_in_sheet=tuple(missing_in_sheet),
    )
    log.info(
        "Reconciled %d database and %d sheet lessons: %d matched, %d mismatched, "
        "%d missing in database, %d missing in sheet.",
        len(valid_database_lessons),
        len(valid_sheet_lessons),
        len(result.matched),
        len(result.mismatched),
        len(result.missing_in_database),
        len(result.missing_in_sheet),
    )
    return result


def _rank_by_best_candidate_score(
    database_lessons: Sequence[DatabaseLesson],
    sheet_lessons: Sequence[SheetLesson],
) -> list[int]:
    best_scores = [_best_candidate_score(lesson, sheet_lessons) for lesson in database_lessons]
    # sorted() is stable, so equal scores keep input order.
    return sorted(
        range(len(database_lessons)), key=lambda index: best_scores[index], reverse=True
    )


def _best_candidate_score(
    database_lesson: DatabaseLesson, sheet_lessons: Sequence[SheetLesson]
) -> float:
    scores = (score_lesson_pair(database_lesson, sheet_lesson) for sheet_lesson in sheet_lessons)
    return max((score for score in scores if score >= CANDIDATE_MATCH_THRESHOLD), default=0.0)


def _claim_best_candidate(
    *,
    database_index: int,
    database_lessons: Sequence[DatabaseLesson],
    sheet_lessons: Sequence[SheetLesson],
    state: _MatchingState,
    log: logging.Logger,
) -> None:
    database_lesson = database_lessons[database_index]
    best_index: int | None = None
    best_score = 0.0
    candidate_count = 0
    for sheet_index, sheet_lesson in enumerate(sheet_lessons):
        if sheet_index in state.claimed_sheet_indices:
            continue
        score = score_lesson_pair(database_lesson, sheet_lesson)
        if score < CANDIDATE_MATCH_THRESHOLD:
            continue
        candidate_count += 1
        if best_index is None or score > best_score:
            best_index, best_score = sheet_index, score

    if best_index is None:
        return
    if candidate_count > 1:
        log.debug(
            "Lesson %s had %d candidate sheet rows; selected score %.2f.",
            database_lesson.lesson_id,
            candidate_count,
            best_score,
        )
    _record_pair(database_index, best_index, database_lessons, sheet_lessons, state)


def _claim_partial_matches(
    *,
    database_lessons: Sequence[DatabaseLesson],
    sheet_lessons: Sequence[SheetLesson],
    state: _MatchingState,
) -> list[SheetLesson]:
    missing_in_database: list[SheetLesson] = []
    for sheet_index, sheet_lesson in enumerate(sheet_lessons):
        if sheet_index in state.claimed_sheet_indices:
            continue
        partner_index = next(
            (
                database_index
                for database_index, database_lesson in enumerate(database_lessons)
                if database_index not in state.claimed_database_indices
                and is_partial_match(database_lesson, sheet_lesson)
            ),
            None,
        )
        if partner_index is None:
            missing_in_database.append(sheet_lesson)
            continue
        _record_pair(partner_index, sheet_index, database_lessons, sheet_lessons, state)
    return missing_in_database


def _record_pair(
    database_index: int,
    sheet_index: int,
    database_lessons: Sequence[DatabaseLesson],
    sheet_lessons: Sequence[SheetLesson],
    state: _MatchingState,
) -> None:
    database_lesson = database_lessons[database_index]
    sheet_lesson = sheet_lessons[sheet_index]
    differences = find_differences(database_lesson, sheet_lesson)
    if differences:
        state.mismatched.append(
            MismatchedPair(
                database_lesson=database_lesson,
                sheet_lesson=sheet_lesson,
                differences=tuple(differences),
            )
        )
    else:
        state.matched.append(
            MatchedPair(database_lesson=database_lesson, sheet_lesson=sheet_lesson)
        )
    state.claimed_database_indices.add(database_index)
    state.claimed_sheet_indices.add(sheet_index)


def _has_student_name(value: str | None) -> bool:
    return bool(value and value.strip())


def _log_dropped(log: logging.Logger, source: str, total: int, valid: int) -> None:
    if total != valid:
        log.warning("Ignoring %d %s lessons without a student name.", total - valid, source)
