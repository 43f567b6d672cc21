"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    DatabaseSettings,
    ReconciliationSettings,
    ResultsSettings,
    SheetSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        tenant_id=_require_identifier(parsed.get("tenant_id"), "tenant_id"),
        database=_parse_database_section(parsed.get("database"), base_path),
        sheet=_parse_sheet_section(parsed.get("sheet"), base_path),
        reconciliation=_parse_reconciliation_section(parsed.get("reconciliation")),
        results=_parse_results_section(parsed.get("results"), base_path),
    )


def _parse_database_section(value: Any, base_path: Path) -> DatabaseSettings:
    section = _require_mapping(value, "database")
    raw_path = _require_non_empty_string(section.get("path"), "database.path")
    return DatabaseSettings(path=_resolve_path(base_path, raw_path))


def _parse_sheet_section(value: Any, base_path: Path) -> SheetSettings:
    section = _require_mapping(value, "sheet")
    raw_path = _require_non_empty_string(section.get("path"), "sheet.path")
    sheet_name = _optional_string(section.get("sheet_name"), "sheet.sheet_name")
    return SheetSettings(path=_resolve_path(base_path, raw_path), sheet_name=sheet_name)


def _parse_reconciliation_section(value: Any) -> ReconciliationSettings:
    section = _optional_mapping(value, "reconciliation")
    return ReconciliationSettings(
        active_on=_optional_date(section.get("active_on"), "reconciliation.active_on")
    )


def _parse_results_section(value: Any, base_path: Path) -> ResultsSettings:
    section = _optional_mapping(value, "results")
    raw_output_dir = _optional_string(section.get("output_dir"), "results.output_dir")
    output_dir = _resolve_path(base_path, raw_output_dir) if raw_output_dir else None
    return ResultsSettings(output_dir=output_dir)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_identifier(value: Any, field_name: str) -> str:
    # YAML reads unquoted numeric identifiers as integers.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _require_non_empty_string(value, field_name)


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_date(value: Any, field_name: str) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return date.fromisoformat(stripped)
        except ValueError as exc:
            raise ConfigurationError(f"{field_name} must be a YYYY-MM-DD date.") from exc
    raise ConfigurationError(f"{field_name} must be a YYYY-MM-DD date.")
