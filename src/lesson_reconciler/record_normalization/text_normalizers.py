"""Canonical forms for free-text lesson fields."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime

_LOGGER = logging.getLogger(__name__)

_NON_WORD_PATTERN = re.compile(r"[^\w\s]|_")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SLASH_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

# Day-first wins when both orders are valid.
_SLASH_DATE_FORMATS = ("%d/%m/%Y", "%m/%d/%Y")


def normalize_name(text: str | None) -> str:
    """Return the comparison key for a student name.

    The key is lowercase, holds only letters, digits and single spaces, and is
    trimmed. It is only meant for equality checks, never for display.
    """
    if not text:
        return ""
    lowered = _NON_WORD_PATTERN.sub("", text.lower())
    return _WHITESPACE_PATTERN.sub(" ", lowered).strip()


def normalize_date(text: str | None) -> str | None:
    """Return ``text`` as an ISO date string when it can be read as one.

    Accepts ``YYYY-MM-DD``, ``D/M/YYYY`` and ``M/D/YYYY``. Blank input means "not
    set" and yields ``None``. Anything else is returned trimmed but otherwise
    unchanged so that callers comparing dates simply see a non-match.
    """
    if text is None or not text.strip():
        return None
    stripped = text.strip()

    if _ISO_DATE_PATTERN.fullmatch(stripped):
        parsed = parse_iso_date(stripped)
        if parsed is not None:
            return parsed.isoformat()

    if _SLASH_DATE_PATTERN.fullmatch(stripped):
        for date_format in _SLASH_DATE_FORMATS:
            try:
                return datetime.strptime(stripped, date_format).date().isoformat()
            except ValueError:
                continue

    _LOGGER.debug("Could not parse date %r; keeping original text.", stripped)
    return stripped


def parse_iso_date(text: str | None) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string, returning ``None`` on failure."""
    if not text or not _ISO_DATE_PATTERN.fullmatch(text.strip()):
        return None
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_clock_minutes(text: str | None) -> int | None:
    """Convert ``HH:MM`` or ``HH:MM:SS`` into minutes after midnight."""
    if not text:
        return None
    match = _CLOCK_PATTERN.fullmatch(text.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes
