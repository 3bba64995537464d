"""
Fetch a Google Doc's title from the Drive v3 metadata API.
"""

import logging
import re

import gspread
from gspread.exceptions import APIError
from gspread.urls import DRIVE_FILES_API_V3_URL

from ..errors import TitleRetrievalError
from ..google_client import get_google_client

logger = logging.getLogger(__name__)

# Tried in order; the first match wins.
DOCUMENT_ID_PATTERNS = (
    re.compile(r"document/d/([a-zA-Z0-9_-]+)"),  # .../document/d/<ID>/edit
    re.compile(r"open\?id=([a-zA-Z0-9_-]+)"),  # .../open?id=<ID>
)


def extract_document_id(url: str) -> str | None:
    """Return the document ID embedded in a Google Docs URL, or None."""
    for pattern in DOCUMENT_ID_PATTERNS:
        m = pattern.search(url)
        if m:
            return m.group(1)
    return None


def _status_message(status: int) -> str:
    if status == 403:
        return "Google Drive API access forbidden. Check API key permissions or document sharing settings."
    if status == 404:
        return "Google Document not found. Check if the URL and Document ID are correct."
    return f"Google Drive API request failed: {status}."


def fetch_title(
    api_key: str,
    document_url: str,
    *,
    client: gspread.Client | None = None,
) -> str | None:
    """
    Return the document title, or None if the response has no title.
    Raises TitleRetrievalError for an unrecognized URL (no request is made) or an HTTP error.
    """
    document_id = extract_document_id(document_url)
    if not document_id:
        logger.warning("Could not extract document ID from URL: %s", document_url)
        raise TitleRetrievalError(
            f"無効なGoogleドキュメントURL、またはドキュメントIDを抽出できませんでした: {document_url}"
        )

    if client is None:
        client = get_google_client(api_key)
    try:
        response = client.http_client.request(
            "get",
            f"{DRIVE_FILES_API_V3_URL}/{document_id}",
            params={"fields": "name"},
        )
    except APIError as e:
        status = e.response.status_code
        logger.error("Drive metadata request failed for %s: %s", document_id, e)
        raise TitleRetrievalError(_status_message(status)) from e

    data = response.json() or {}
    title = data.get("name")
    if not title:
        logger.warning("Document title not found in API response for ID: %s", document_id)
        return None
    return title
