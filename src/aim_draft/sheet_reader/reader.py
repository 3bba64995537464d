"""
Find a video's release date in the master Google Sheet.
Reads the video-number and release-date columns in one request and scans rows top to bottom.
"""

import logging
from dataclasses import dataclass

import gspread
from gspread.exceptions import APIError

from ..errors import SheetLookupError
from ..google_client import get_google_client
from .cell_dates import normalize_date_cell
from .columns import column_label_to_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TabularRange:
    """Which spreadsheet, tab, columns and row bound to search."""
    spreadsheet_id: str
    sheet_name: str
    id_column: str  # video number column, e.g. "B"
    date_column: str  # release date column, e.g. "X"
    max_rows: int = 500

    @property
    def first_column(self) -> str:
        return min(self.id_column, self.date_column, key=column_label_to_index)

    @property
    def last_column(self) -> str:
        return max(self.id_column, self.date_column, key=column_label_to_index)

    def a1_range(self) -> str:
        """e.g. "CRH_マスター!B1:X500" """
        return f"{self.sheet_name}!{self.first_column}1:{self.last_column}{self.max_rows}"

    def offsets(self) -> tuple[int, int]:
        """(id, date) column positions relative to the leftmost fetched column."""
        base = column_label_to_index(self.first_column)
        return (
            column_label_to_index(self.id_column) - base,
            column_label_to_index(self.date_column) - base,
        )


def fetch_range(client: gspread.Client, range_ref: TabularRange) -> list[list]:
    """One values.get request. Raises SheetLookupError on a non-2xx response."""
    try:
        data = client.http_client.values_get(range_ref.spreadsheet_id, range_ref.a1_range())
    except APIError as e:
        status = e.response.status_code
        logger.error("Sheets request failed for %s: %s", range_ref.a1_range(), e)
        raise SheetLookupError(
            f"Google Sheets API request failed: {status}. "
            "Check API key, spreadsheet ID, and sheet permissions."
        ) from e
    return data.get("values") or []


def scan_rows(rows: list[list], range_ref: TabularRange, target_id: str) -> str | None:
    """
    Return the normalized release date of the first row whose video number equals target_id.
    A matching row with an unparseable date ends the search.
    """
    id_offset, date_offset = range_ref.offsets()
    needed = max(id_offset, date_offset)
    for row in rows:
        if len(row) <= needed or not row[id_offset]:
            continue
        if str(row[id_offset]).strip() != target_id:
            continue
        raw_date = str(row[date_offset]).strip()
        release_date = normalize_date_cell(raw_date)
        if release_date is None:
            logger.error("Release date for video %s could not be parsed: %r", target_id, raw_date)
        return release_date
    logger.warning("Video number %r not found in the spreadsheet.", target_id)
    return None


def find_release_date(
    api_key: str,
    range_ref: TabularRange,
    target_id: str,
    *,
    client: gspread.Client | None = None,
) -> str | None:
    """
    Look up `target_id` in the sheet and return its release date as YYYY-MM-DD, or None if not found.
    Request failures raise SheetLookupError; other errors propagate.
    """
    if client is None:
        client = get_google_client(api_key)
    rows = fetch_range(client, range_ref)
    if not rows:
        logger.warning("No data found in range %s.", range_ref.a1_range())
        return None
    return scan_rows(rows, range_ref, target_id)
