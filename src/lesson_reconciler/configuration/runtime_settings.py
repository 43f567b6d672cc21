"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path


@dataclass(frozen=True)
class DatabaseSettings:
    """Location of the lessons workbook acting as the scheduling database."""

    path: Path


@dataclass(frozen=True)
class SheetSettings:
    """Location of the lesson sheet kept by staff."""

    path: Path
    sheet_name: str | None


@dataclass(frozen=True)
class ReconciliationSettings:
    """Settings applied when selecting database lessons to reconcile."""

    active_on: date | None


@dataclass(frozen=True)
class ResultsSettings:
    """Where result workbooks are written."""

    output_dir: Path | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    tenant_id: str
    database: DatabaseSettings
    sheet: SheetSettings
    reconciliation: ReconciliationSettings
    results: ResultsSettings
