"""Reconciliation run use-case service."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from lesson_reconciler.configuration import ConfigurationError, load_configuration
from lesson_reconciler.reconciliation import reconcile_lessons
from lesson_reconciler.results_writing import RunMetadata, write_results_workbook
from lesson_reconciler.source_loading import (
    SourceValidationError,
    WorkbookLessonStore,
    read_sheet_lessons,
)

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_reconciliation_run(request: RunRequest) -> RunOutcome:
    """Reconcile the configured sources and write the results workbook."""
    artifacts = load_run_artifacts(request.config_path)
    run_start = datetime.now(UTC)
    result = reconcile_lessons(
        artifacts.store.fetch_database_lessons(),
        artifacts.sheet_lessons,
    )

    configuration = artifacts.configuration
    output_dir = request.output_dir or configuration.results.output_dir
    output_path = _resolve_output_path(configuration.sheet.path, output_dir)
    run_metadata = RunMetadata(
        run_start=run_start,
        tenant_id=configuration.tenant_id,
        database_path=configuration.database.path,
        sheet_path=configuration.sheet.path,
        output_path=output_path.resolve(),
        active_on=artifacts.active_on,
    )
    try:
        write_results_workbook(output_path, result, run_metadata)
    except OSError as exc:
        raise RunExecutionError(f"Failed to write results workbook: {exc}") from exc
    _LOGGER.info("Results written to %s.", output_path.resolve())

    return RunOutcome(
        output_path=output_path.resolve(),
        matched=len(result.matched),
        mismatched=len(result.mismatched),
        missing_in_database=len(result.missing_in_database),
        missing_in_sheet=len(result.missing_in_sheet),
    )


def load_run_artifacts(config_path: str) -> RunArtifacts:
    """Load the configuration and both lesson sources it points at."""
    try:
        configuration = load_configuration(config_path)
        active_on = configuration.reconciliation.active_on or datetime.now(UTC).date()
        store = WorkbookLessonStore.load(
            configuration.database.path,
            tenant_id=configuration.tenant_id,
            active_on=active_on,
        )
        sheet_lessons = read_sheet_lessons(
            configuration.sheet.path, configuration.sheet.sheet_name
        )
    except (ConfigurationError, SourceValidationError, OSError, ValueError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(
        configuration=configuration,
        active_on=active_on,
        store=store,
        sheet_lessons=sheet_lessons,
    )


def _resolve_output_path(sheet_path: Path, output_dir: Path | str | None) -> Path:
    destination = Path(output_dir) if output_dir else sheet_path.parent
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return destination / f"{sheet_path.stem}-reconciliation-{timestamp}.xlsx"
