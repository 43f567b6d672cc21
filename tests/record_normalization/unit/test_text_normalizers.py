"""Tests for free-text lesson field normalizers."""

from __future__ import annotations

from datetime import date

import pytest
from lesson_reconciler.record_normalization import (
    normalize_date,
    normalize_name,
    parse_clock_minutes,
    parse_iso_date,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Alice Smith", "alice smith"),
        ("  ALICE   smith ", "alice smith"),
        ("O'Brien-Smith, Jr.", "obriensmith jr"),
        ("snake_case_name", "snakecasename"),
        ("José Núñez", "josé núñez"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_name_builds_comparison_key(raw: str | None, expected: str) -> None:
    assert normalize_name(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Alice Smith", "  Mary-Jane  O'Neil ", "\tTab\nSeparated\tName", "___", "A. B. C."],
)
def test_normalize_name_is_a_projection(raw: str) -> None:
    once = normalize_name(raw)

    assert normalize_name(once) == once


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-05", "2024-01-05"),
        (" 2024-01-05 ", "2024-01-05"),
        ("05/01/2024", "2024-01-05"),
        ("5/1/2024", "2024-01-05"),
        ("01/25/2024", "2024-01-25"),
    ],
)
def test_normalize_date_returns_iso_for_known_formats(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_date_treats_blank_as_not_set(raw: str | None) -> None:
    assert normalize_date(raw) is None


@pytest.mark.parametrize("raw", ["next monday", "2024-02-30", "13/13/2024", "2024/01/05"])
def test_normalize_date_keeps_unreadable_text_unchanged(raw: str) -> None:
    assert normalize_date(raw) == raw


def test_normalize_date_trims_unreadable_text() -> None:
    assert normalize_date("  next monday ") == "next monday"


def test_parse_iso_date_is_strict() -> None:
    assert parse_iso_date("2024-03-01") == date(2024, 3, 1)
    assert parse_iso_date("01/03/2024") is None
    assert parse_iso_date("2024-13-01") is None
    assert parse_iso_date(None) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("09:30", 570),
        ("9:05", 545),
        ("17:45:00", 1065),
        ("00:00", 0),
        ("24:00", None),
        ("10:75", None),
        ("half past nine", None),
        (None, None),
    ],
)
def test_parse_clock_minutes(raw: str | None, expected: int | None) -> None:
    assert parse_clock_minutes(raw) == expected
