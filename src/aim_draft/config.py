"""
Runtime configuration: API keys and the sheet to search.
Values come from environment variables, optionally loaded from a .env file.
"""

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .sheet_reader.columns import is_column_label
from .sheet_reader.reader import TabularRange

GOOGLE_API_KEY_ENV = "GOOGLE_API_KEY"
LLM_API_KEY_ENV = "OLLAMA_API_KEY"

# Production master sheet
DEFAULT_SPREADSHEET_ID = "1qK5u_ioBDrebXkPtlEaF7J9TQ5_XYdihsMYU6hK7x8k"
DEFAULT_SHEET_NAME = "CRH_マスター"
DEFAULT_VIDEO_NUMBER_COLUMN = "B"
DEFAULT_RELEASE_DATE_COLUMN = "X"
DEFAULT_MAX_ROWS = 500

DEFAULT_OLLAMA_HOST = "https://ollama.com"
DEFAULT_OLLAMA_MODEL = "gpt-oss:20b"


@dataclass(frozen=True)
class AppConfig:
    """Everything a pipeline run needs; read-only for the run's lifetime."""
    google_api_key: str | None
    llm_api_key: str | None
    sheet: TabularRange
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    ollama_host: str | None = DEFAULT_OLLAMA_HOST

    def missing_keys(self) -> list[str]:
        """Env var names of the API keys that are not set."""
        missing = []
        if not self.llm_api_key:
            missing.append(LLM_API_KEY_ENV)
        if not self.google_api_key:
            missing.append(GOOGLE_API_KEY_ENV)
        return missing


def build_sheet_range(
    spreadsheet_id: str = DEFAULT_SPREADSHEET_ID,
    sheet_name: str = DEFAULT_SHEET_NAME,
    id_column: str = DEFAULT_VIDEO_NUMBER_COLUMN,
    date_column: str = DEFAULT_RELEASE_DATE_COLUMN,
    max_rows: int = DEFAULT_MAX_ROWS,
) -> TabularRange:
    """Validate and build a TabularRange. Raises ValueError on bad column labels or row limit."""
    id_column = id_column.strip().upper()
    date_column = date_column.strip().upper()
    for label in (id_column, date_column):
        if not is_column_label(label):
            raise ValueError(f"Invalid column label: {label!r}")
    if max_rows < 1:
        raise ValueError(f"max_rows must be positive, got {max_rows}")
    return TabularRange(
        spreadsheet_id=spreadsheet_id,
        sheet_name=sheet_name,
        id_column=id_column,
        date_column=date_column,
        max_rows=max_rows,
    )


def _int_env(env, name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(env_file: str | Path | None = None) -> AppConfig:
    """
    Build AppConfig from the environment.
    If env_file is given it is loaded first; otherwise a .env in the cwd is used when present.
    Existing environment variables win over .env values.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))
    env = os.environ
    sheet = build_sheet_range(
        spreadsheet_id=env.get("AIM_SPREADSHEET_ID") or DEFAULT_SPREADSHEET_ID,
        sheet_name=env.get("AIM_SHEET_NAME") or DEFAULT_SHEET_NAME,
        id_column=env.get("AIM_VIDEO_NUMBER_COLUMN") or DEFAULT_VIDEO_NUMBER_COLUMN,
        date_column=env.get("AIM_RELEASE_DATE_COLUMN") or DEFAULT_RELEASE_DATE_COLUMN,
        max_rows=_int_env(env, "AIM_MAX_ROWS", DEFAULT_MAX_ROWS),
    )
    return AppConfig(
        google_api_key=env.get(GOOGLE_API_KEY_ENV) or None,
        llm_api_key=env.get(LLM_API_KEY_ENV) or None,
        sheet=sheet,
        ollama_model=env.get("AIM_OLLAMA_MODEL") or DEFAULT_OLLAMA_MODEL,
        ollama_host=env.get("OLLAMA_HOST") or DEFAULT_OLLAMA_HOST,
    )


def with_overrides(
    config: AppConfig,
    *,
    spreadsheet_id: str | None = None,
    sheet_name: str | None = None,
    max_rows: int | None = None,
    ollama_model: str | None = None,
    ollama_host: str | None = None,
) -> AppConfig:
    """Apply CLI flags on top of a loaded config; None leaves a value unchanged."""
    sheet = config.sheet
    if spreadsheet_id or sheet_name or max_rows is not None:
        sheet = build_sheet_range(
            spreadsheet_id=spreadsheet_id or sheet.spreadsheet_id,
            sheet_name=sheet_name or sheet.sheet_name,
            id_column=sheet.id_column,
            date_column=sheet.date_column,
            max_rows=max_rows if max_rows is not None else sheet.max_rows,
        )
    return dataclasses.replace(
        config,
        sheet=sheet,
        ollama_model=ollama_model or config.ollama_model,
        ollama_host=ollama_host or config.ollama_host,
    )
