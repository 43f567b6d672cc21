"""Alignment run use-case service."""

from __future__ import annotations

from lesson_reconciler.alignment import AlignmentSession
from lesson_reconciler.reconciliation import reconcile_lessons

from .reconciliation_run_use_case import RunExecutionError, load_run_artifacts
from .run_contracts import AlignmentOutcome, AlignmentRequest


def execute_alignment_run(request: AlignmentRequest) -> AlignmentOutcome:
    """Overwrite one mismatched database lesson with its sheet counterpart.

    The sources are reconciled afresh so the lesson is aligned against the pair
    the matcher produces right now.
    """
    artifacts = load_run_artifacts(request.config_path)
    result = reconcile_lessons(
        artifacts.store.fetch_database_lessons(),
        artifacts.sheet_lessons,
    )
    session = AlignmentSession(result, artifacts.store)
    pair = session.find_mismatch(request.lesson_id)
    if pair is None:
        raise RunExecutionError(f"Lesson {request.lesson_id} has no mismatch to align.")

    outcome = session.align(pair)
    return AlignmentOutcome(
        lesson_id=request.lesson_id,
        success=outcome.success,
        message=outcome.message,
    )
