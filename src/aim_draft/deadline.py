"""
First-draft deadline: the release date minus a fixed number of days.
"""

from datetime import date, timedelta

DEADLINE_OFFSET_DAYS = 12


class InvalidDateError(ValueError):
    """Release date string is not a valid calendar date."""


def parse_release_date(text: str) -> date:
    """
    Parse a YYYY-MM-DD string as a plain calendar date.
    No time or time zone is involved, so the day never shifts.
    """
    try:
        return date.fromisoformat(str(text).strip())
    except ValueError as e:
        raise InvalidDateError(f"Invalid release date: {text!r}") from e


def compute_deadline(release_date: date | str) -> date:
    """Return the date DEADLINE_OFFSET_DAYS before release_date."""
    if not isinstance(release_date, date):
        release_date = parse_release_date(release_date)
    try:
        return release_date - timedelta(days=DEADLINE_OFFSET_DAYS)
    except OverflowError as e:
        raise InvalidDateError(f"Release date too early for a deadline: {release_date.isoformat()}") from e


def format_japanese_date(value: date) -> str:
    """2024-05-01 → '2024年5月1日' (no zero padding)."""
    return f"{value.year}年{value.month}月{value.day}日"
