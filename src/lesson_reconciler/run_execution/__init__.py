"""Run execution domain exports."""

from .alignment_run_use_case import execute_alignment_run
from .reconciliation_run_use_case import (
    RunExecutionError,
    execute_reconciliation_run,
    load_run_artifacts,
)
from .run_contracts import (
    AlignmentOutcome,
    AlignmentRequest,
    RunArtifacts,
    RunOutcome,
    RunRequest,
)

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "AlignmentRequest",
    "AlignmentOutcome",
    "RunExecutionError",
    "execute_reconciliation_run",
    "execute_alignment_run",
    "load_run_artifacts",
]
