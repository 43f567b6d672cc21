"""Results writing domain exports."""

from .report_models import ReconciliationStatus, RunMetadata
from .run_report_writer import write_results_workbook

__all__ = [
    "ReconciliationStatus",
    "RunMetadata",
    "write_results_workbook",
]
