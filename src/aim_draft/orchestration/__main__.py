"""
CLI: full pipeline (Drive title → Ollama → Sheet → deadline message).
  python -m aim_draft.orchestration <DOC_URL> [--json]
  python -m aim_draft.orchestration --interactive
"""

import argparse
import json

from ..config import load_config, with_overrides
from ..deadline import format_japanese_date
from ..utils import configure_logging
from .pipeline import DraftNoticePipeline
from .run import Phase, Run


def print_run(run: Run) -> None:
    if run.phase is Phase.FAILED:
        print(f"Error: {run.failure}")
        if run.title:
            print(f"  Title: {run.title}")
        if run.video_number:
            print(f"  Video number: {run.video_number}")
        return

    print(f"Title: {run.title}")
    print(f"URL: {run.source_url}")
    print(f"Video number: {run.video_number}")
    print(f"Release date: {format_japanese_date(run.release_date)}")
    print(f"First draft due: {format_japanese_date(run.deadline)}")
    print()
    print("=== MESSAGE (copy below) ===")
    print(run.message)


def interactive(pipeline: DraftNoticePipeline) -> None:
    """Prompt for URLs until an empty line; each result is followed by a reset."""
    while True:
        if pipeline.run.failure is not None:
            print(f"Error: {pipeline.run.failure}")
            return
        try:
            url = input("指示書URL (empty to quit): ").strip()
        except EOFError:
            return
        if not url:
            return
        print("Processing...")
        print_run(pipeline.submit(url))
        print()
        pipeline.reset()


def main() -> None:
    ap = argparse.ArgumentParser(
        description="AIM draft notice: instruction doc URL → first-draft deadline message"
    )
    ap.add_argument("url", nargs="?", help="Google Docs instruction URL")
    ap.add_argument("--interactive", "-i", action="store_true", help="Prompt for URLs in a loop")
    ap.add_argument("--spreadsheet-id", help="Override spreadsheet ID")
    ap.add_argument("--sheet-name", help="Override sheet/tab name")
    ap.add_argument("--max-rows", type=int, help="Rows to search")
    ap.add_argument("--model", "-m", help="Ollama model")
    ap.add_argument("--ollama-host", help="Ollama host")
    ap.add_argument("--env-file", help="Path to .env file")
    ap.add_argument("--json", action="store_true", help="Output result as JSON")
    args = ap.parse_args()

    if not args.url and not args.interactive:
        ap.error("a URL is required unless --interactive is given")

    configure_logging("aim_draft")
    config = with_overrides(
        load_config(args.env_file),
        spreadsheet_id=args.spreadsheet_id,
        sheet_name=args.sheet_name,
        max_rows=args.max_rows,
        ollama_model=args.model,
        ollama_host=args.ollama_host,
    )
    pipeline = DraftNoticePipeline(config)

    if args.interactive:
        interactive(pipeline)
        return

    run = pipeline.submit(args.url)
    if args.json:
        print(json.dumps(run.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_run(run)
    if run.phase is Phase.FAILED:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
