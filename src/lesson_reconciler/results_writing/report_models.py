"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path


class ReconciliationStatus(str, Enum):
    """Rendered status in the output workbook status column."""

    MATCHED = "MATCHED"
    MISMATCHED = "MISMATCHED"
    MISSING_IN_DATABASE = "MISSING_IN_DATABASE"
    MISSING_IN_SHEET = "MISSING_IN_SHEET"


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    tenant_id: str
    database_path: Path
    sheet_path: Path
    output_path: Path
    active_on: date
