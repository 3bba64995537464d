"""
CLI: print a Google Doc's title.
  python -m aim_draft.doc_reader <DOC_URL>
"""

import argparse

from ..config import load_config
from ..errors import TitleRetrievalError
from ..utils import configure_logging
from .title import fetch_title


def main() -> None:
    ap = argparse.ArgumentParser(description="Fetch a Google Doc title via the Drive API")
    ap.add_argument("url", help="Google Docs URL")
    ap.add_argument("--env-file", help="Path to .env file")
    args = ap.parse_args()

    configure_logging("aim_draft")
    config = load_config(args.env_file)
    if not config.google_api_key:
        print("Error: GOOGLE_API_KEY is not set.")
        raise SystemExit(1)

    try:
        title = fetch_title(config.google_api_key, args.url)
    except TitleRetrievalError as e:
        print(f"Error: {e}")
        raise SystemExit(1)
    if title is None:
        print("No title found for this document.")
        raise SystemExit(1)
    print(title)


if __name__ == "__main__":
    main()
