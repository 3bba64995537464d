"""
gspread client authenticated with a plain Google API key.
Used for both the Sheets values API and the Drive metadata API.
"""

import gspread


def get_google_client(api_key: str) -> gspread.Client:
    """
    Return a gspread client that sends `api_key` with every request.
    API-key access only works for files shared as "anyone with the link".
    """
    if not api_key:
        raise ValueError("Google API key is empty. Set GOOGLE_API_KEY.")
    return gspread.api_key(api_key)
