"""Alignment domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lesson_reconciler.reconciliation.lesson_records import DatabaseLesson


@dataclass(frozen=True)
class ConflictCheck:
    """Outcome of checking whether an alignment may proceed."""

    blocked: bool
    reason: str | None = None

    @staticmethod
    def clear() -> ConflictCheck:
        return ConflictCheck(blocked=False)

    @staticmethod
    def blocked_by(reason: str) -> ConflictCheck:
        return ConflictCheck(blocked=True, reason=reason)


@dataclass(frozen=True)
class AlignmentResult:
    """Outcome of overwriting a database lesson with its sheet counterpart."""

    success: bool
    message: str
    updated_lesson: DatabaseLesson | None = None
    blocked: bool = False

    @staticmethod
    def succeeded(updated_lesson: DatabaseLesson, message: str) -> AlignmentResult:
        return AlignmentResult(success=True, message=message, updated_lesson=updated_lesson)

    @staticmethod
    def failed(message: str) -> AlignmentResult:
        return AlignmentResult(success=False, message=message)

    @staticmethod
    def refused(message: str) -> AlignmentResult:
        return AlignmentResult(success=False, message=message, blocked=True)


class AlignmentStatus(str, Enum):
    """State of an alignment attempt that has not succeeded (yet)."""

    PENDING = "pending"
    BLOCKED = "blocked"
    FAILED = "failed"


@dataclass(frozen=True)
class AlignmentAttempt:
    """Transient alignment state for one database lesson."""

    status: AlignmentStatus
    reason: str | None = None
