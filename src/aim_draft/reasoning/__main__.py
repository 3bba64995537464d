"""
CLI: extract the video number from a title.
  python -m aim_draft.reasoning "第045回配信指示書" [--model gpt-oss:20b] [--ollama-host URL]
"""

import argparse

from ..config import load_config, with_overrides
from ..utils import configure_logging
from .video_number import extract_video_number


def main() -> None:
    ap = argparse.ArgumentParser(description="Extract a 3-digit video number from a title using Ollama")
    ap.add_argument("title", help="Document title")
    ap.add_argument("--model", "-m", help="Ollama model (default: AIM_OLLAMA_MODEL)")
    ap.add_argument("--ollama-host", help="Ollama host (default: OLLAMA_HOST or https://ollama.com)")
    ap.add_argument("--env-file", help="Path to .env file")
    args = ap.parse_args()

    configure_logging("aim_draft")
    config = with_overrides(load_config(args.env_file), ollama_model=args.model, ollama_host=args.ollama_host)

    print(f"Calling Ollama ({config.ollama_model})...")
    number = extract_video_number(
        config.llm_api_key,
        args.title,
        model=config.ollama_model,
        host=config.ollama_host,
    )
    if number is None:
        print(f"No 3-digit video number found in: {args.title}")
        raise SystemExit(1)
    print(number)


if __name__ == "__main__":
    main()
