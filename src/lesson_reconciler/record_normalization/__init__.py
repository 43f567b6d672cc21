"""Record normalization exports."""

from .text_normalizers import normalize_date, normalize_name, parse_clock_minutes, parse_iso_date

__all__ = [
    "normalize_name",
    "normalize_date",
    "parse_iso_date",
    "parse_clock_minutes",
]
