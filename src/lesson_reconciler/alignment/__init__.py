"""Alignment domain exports."""

from .alignment_outcomes import AlignmentAttempt, AlignmentResult, AlignmentStatus, ConflictCheck
from .alignment_service import apply_alignment
from .alignment_session import AlignmentSession
from .conflict_guard import check_alignment_conflict
from .lesson_store import AlignmentFields, LessonStore, LessonStoreError, SubjectRef

__all__ = [
    "AlignmentAttempt",
    "AlignmentFields",
    "AlignmentResult",
    "AlignmentSession",
    "AlignmentStatus",
    "ConflictCheck",
    "LessonStore",
    "LessonStoreError",
    "SubjectRef",
    "apply_alignment",
    "check_alignment_conflict",
]
