import json

import pytest
import requests
from gspread.exceptions import APIError

from aim_draft.config import build_sheet_range

AIM_ENV_VARS = (
    "GOOGLE_API_KEY",
    "OLLAMA_API_KEY",
    "AIM_SPREADSHEET_ID",
    "AIM_SHEET_NAME",
    "AIM_VIDEO_NUMBER_COLUMN",
    "AIM_RELEASE_DATE_COLUMN",
    "AIM_MAX_ROWS",
    "AIM_OLLAMA_MODEL",
    "OLLAMA_HOST",
    "AIM_LOG_LEVEL",
)


def make_api_error(status: int, message: str = "error") -> APIError:
    response = requests.Response()
    response.status_code = status
    response._content = json.dumps(
        {"error": {"code": status, "message": message, "status": "ERROR"}}
    ).encode("utf-8")
    return APIError(response)


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def json(self):
        return self._payload


class FakeHttpClient:
    """Stands in for gspread's HTTPClient; records every call."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def request(self, method, endpoint, params=None, **kwargs):
        self.calls.append(("request", method, endpoint, params))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.payload)

    def values_get(self, spreadsheet_id, range_name, params=None):
        self.calls.append(("values_get", spreadsheet_id, range_name))
        if self.error is not None:
            raise self.error
        return self.payload


class FakeGoogleClient:
    def __init__(self, payload=None, error=None):
        self.http_client = FakeHttpClient(payload, error)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in AIM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sheet_range():
    return build_sheet_range(spreadsheet_id="sheet-123", sheet_name="CRH_マスター")
