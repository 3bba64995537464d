#!/usr/bin/env python3
"""
One-command entry point: instruction doc URL → Drive title → Ollama → Sheet → first-draft message.
Usage:
  python scripts/run_aim_draft.py https://docs.google.com/document/d/<ID>/edit
Requires: GOOGLE_API_KEY and OLLAMA_API_KEY (environment or .env), doc and sheet shared by link.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/run_aim_draft.py <DOC_URL>")
        print("  DOC_URL = Google Docs URL of the AIM instruction document")
        return 1
    url = sys.argv[1].strip()

    from aim_draft.config import load_config
    from aim_draft.orchestration import Phase, run_pipeline
    from aim_draft.utils import configure_logging

    configure_logging("aim_draft")
    config = load_config(ROOT / ".env")
    missing = config.missing_keys()
    if missing:
        print(f"Missing API keys: {', '.join(missing)}. Set them in the environment or .env.")
        return 1

    print(f"Running pipeline: url={url}")
    print("Fetching title → extracting video number → looking up release date...\n")
    run = run_pipeline(url, config)

    if run.phase is Phase.FAILED:
        print(f"Error: {run.failure}")
        return 1

    print(run.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
