"""Lesson reconciliation domain exports."""

from .difference_reporting import describe_differences, find_differences
from .lesson_matcher import reconcile_lessons
from .lesson_records import DatabaseLesson, SheetLesson
from .pair_scoring import (
    CANDIDATE_MATCH_THRESHOLD,
    PairScore,
    date_range_proximity,
    is_candidate_match,
    is_partial_match,
    score_breakdown,
    score_lesson_pair,
)
from .reconciliation_outcomes import (
    DifferenceField,
    FieldDifference,
    MatchedPair,
    MismatchedPair,
    ReconciliationResult,
)

__all__ = [
    "DatabaseLesson",
    "SheetLesson",
    "DifferenceField",
    "FieldDifference",
    "MatchedPair",
    "MismatchedPair",
    "ReconciliationResult",
    "PairScore",
    "CANDIDATE_MATCH_THRESHOLD",
    "score_breakdown",
    "score_lesson_pair",
    "date_range_proximity",
    "is_candidate_match",
    "is_partial_match",
    "find_differences",
    "describe_differences",
    "reconcile_lessons",
]
