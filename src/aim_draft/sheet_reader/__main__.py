"""
CLI: look up a release date by video number.
  python -m aim_draft.sheet_reader 045 [--spreadsheet-id ID] [--sheet-name NAME] [--json]
"""

import argparse
import json

from ..config import load_config, with_overrides
from ..errors import SheetLookupError
from ..utils import configure_logging
from .reader import find_release_date


def main() -> None:
    ap = argparse.ArgumentParser(description="Find a video's release date in the master Google Sheet")
    ap.add_argument("video_number", help="3-digit video number, e.g. 045")
    ap.add_argument("--spreadsheet-id", help="Spreadsheet ID (default: AIM_SPREADSHEET_ID or built-in)")
    ap.add_argument("--sheet-name", help="Tab name (default: AIM_SHEET_NAME or CRH_マスター)")
    ap.add_argument("--max-rows", type=int, help="Rows to search")
    ap.add_argument("--env-file", help="Path to .env file")
    ap.add_argument("--json", action="store_true", help="Output as JSON")
    args = ap.parse_args()

    configure_logging("aim_draft")
    config = with_overrides(
        load_config(args.env_file),
        spreadsheet_id=args.spreadsheet_id,
        sheet_name=args.sheet_name,
        max_rows=args.max_rows,
    )
    if not config.google_api_key:
        print("Error: GOOGLE_API_KEY is not set.")
        raise SystemExit(1)

    try:
        release_date = find_release_date(config.google_api_key, config.sheet, args.video_number)
    except SheetLookupError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    if args.json:
        print(json.dumps({"video_number": args.video_number, "release_date": release_date}, indent=2))
    elif release_date is None:
        print(f"No release date found for video number: {args.video_number}")
    else:
        print(f"Release date: {release_date}")


if __name__ == "__main__":
    main()
