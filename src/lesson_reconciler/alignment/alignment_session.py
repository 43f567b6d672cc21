"""Alignment bookkeeping over one reconciliation result."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from lesson_reconciler.reconciliation.reconciliation_outcomes import (
    MatchedPair,
    MismatchedPair,
    ReconciliationResult,
)

from .alignment_outcomes import AlignmentAttempt, AlignmentResult, AlignmentStatus, ConflictCheck
from .alignment_service import apply_alignment
from .conflict_guard import check_alignment_conflict
from .lesson_store import LessonStore

_LOGGER = logging.getLogger(__name__)


class AlignmentSession:
    """Tracks alignment attempts for the mismatches of one reconciliation result.

    Attempts that are pending, blocked or failed are kept per lesson id. A
    successful alignment clears the attempt and moves the pair from the
    mismatched bucket to the matched bucket.
    """

    def __init__(
        self,
        result: ReconciliationResult,
        store: LessonStore,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._result = result
        self._store = store
        self._attempts: dict[str, AlignmentAttempt] = {}
        self._log = logger or _LOGGER

    @property
    def result(self) -> ReconciliationResult:
        return self._result

    @property
    def attempts(self) -> Mapping[str, AlignmentAttempt]:
        return dict(self._attempts)

    def find_mismatch(self, lesson_id: str) -> MismatchedPair | None:
        """Return the open mismatch for ``lesson_id``, if any."""
        return next(
            (
                pair
                for pair in self._result.mismatched
                if pair.database_lesson.lesson_id == lesson_id
            ),
            None,
        )

    def check(self, pair: MismatchedPair) -> ConflictCheck:
        """Run the conflict guard for ``pair`` and remember a blocking outcome."""
        lesson_id = pair.database_lesson.lesson_id
        check = check_alignment_conflict(pair.database_lesson, pair.sheet_lesson, self._store)
        if check.blocked:
            self._attempts[lesson_id] = AlignmentAttempt(AlignmentStatus.BLOCKED, check.reason)
        else:
            self._attempts.pop(lesson_id, None)
        return check

    def align(self, pair: MismatchedPair) -> AlignmentResult:
        """Align ``pair`` and update the attempt state and result buckets."""
        if not any(candidate is pair for candidate in self._result.mismatched):
            raise ValueError(f"Lesson {pair.database_lesson.lesson_id} is not an open mismatch.")
        lesson_id = pair.database_lesson.lesson_id
        self._attempts[lesson_id] = AlignmentAttempt(AlignmentStatus.PENDING)

        outcome = apply_alignment(pair.database_lesson, pair.sheet_lesson, self._store)
        if outcome.blocked:
            self._attempts[lesson_id] = AlignmentAttempt(AlignmentStatus.BLOCKED, outcome.message)
            self._log.info("Alignment of lesson %s blocked: %s", lesson_id, outcome.message)
            return outcome
        if not outcome.success or outcome.updated_lesson is None:
            self._attempts[lesson_id] = AlignmentAttempt(AlignmentStatus.FAILED, outcome.message)
            return outcome

        self._attempts.pop(lesson_id, None)
        aligned = MatchedPair(
            database_lesson=outcome.updated_lesson, sheet_lesson=pair.sheet_lesson
        )
        self._result = replace(
            self._result,
            matched=self._result.matched + (aligned,),
            mismatched=tuple(
                candidate for candidate in self._result.mismatched if candidate is not pair
            ),
        )
        return outcome
