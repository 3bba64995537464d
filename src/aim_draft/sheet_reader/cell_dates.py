"""
Normalize the release-date cell of a sheet row to YYYY-MM-DD.

Parsers are tried in order; each returns the normalized string or None,
and the first non-None result wins.
"""

import re
from datetime import datetime, timedelta
from typing import Callable

ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
SERIAL_RE = re.compile(r"[0-9]+(\.[0-9]+)?")

# Day zero of spreadsheet serial dates (Sheets / Excel 1900 system).
SERIAL_EPOCH = datetime(1899, 12, 30)

# Formats seen in hand-typed cells. Year bounds are checked after parsing.
GENERIC_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y.%m.%d",
    "%Y年%m月%d日",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)
MIN_YEAR_EXCLUSIVE = 1900
MAX_YEAR_EXCLUSIVE = 2100


def parse_iso_cell(value: str) -> str | None:
    """Canonical YYYY-MM-DD, returned unchanged."""
    if ISO_DATE_RE.fullmatch(value):
        return value
    return None


def parse_serial_cell(value: str) -> str | None:
    """Day count since 1899-12-30 (fractions are the time of day)."""
    if not SERIAL_RE.fullmatch(value):
        return None
    try:
        moment = SERIAL_EPOCH + timedelta(days=float(value))
    except OverflowError:
        return None
    return moment.date().isoformat()


def parse_generic_cell(value: str) -> str | None:
    """Any of GENERIC_FORMATS with a plausible year."""
    # strptime accepts any Unicode digit; cells must use ASCII ones
    if any(ch.isdigit() and not ch.isascii() for ch in value):
        return None
    for fmt in GENERIC_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if MIN_YEAR_EXCLUSIVE < parsed.year < MAX_YEAR_EXCLUSIVE:
            return parsed.date().isoformat()
        return None
    return None


CELL_DATE_PARSERS: tuple[Callable[[str], str | None], ...] = (
    parse_iso_cell,
    parse_serial_cell,
    parse_generic_cell,
)


def normalize_date_cell(value: str) -> str | None:
    """Return the first parser's result, or None if every parser rejects the cell."""
    text = str(value).strip()
    if not text:
        return None
    for parser in CELL_DATE_PARSERS:
        result = parser(text)
        if result is not None:
            return result
    return None
