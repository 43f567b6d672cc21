"""Helpers for reading typed values out of workbook cells."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time

from openpyxl.worksheet.worksheet import Worksheet


class SourceValidationError(Exception):
    """Raised when a source workbook is structurally invalid."""


def read_header_map(sheet: Worksheet, required_columns: Sequence[str]) -> dict[str, int]:
    """Map each required column name in row 1 to its column index."""
    header_map: dict[str, int] = {}
    for column in range(1, sheet.max_column + 1):
        name = cell_text(sheet.cell(row=1, column=column).value)
        if name and name not in header_map:
            header_map[name] = column
    missing = [name for name in required_columns if name not in header_map]
    if missing:
        raise SourceValidationError(
            f"Sheet '{sheet.title}' is missing required columns: {', '.join(missing)}."
        )
    return {name: header_map[name] for name in required_columns}


def read_row(sheet: Worksheet, row_number: int, header_map: Mapping[str, int]) -> dict[str, object]:
    return {
        name: sheet.cell(row=row_number, column=column).value
        for name, column in header_map.items()
    }


def row_is_empty(row_data: Mapping[str, object]) -> bool:
    return all(not cell_text(value) for value in row_data.values())


def cell_text(value: object) -> str:
    """Render a cell as trimmed text; date cells become ISO dates."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def optional_cell_text(value: object) -> str | None:
    return cell_text(value) or None
