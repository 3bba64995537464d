"""
Extract the 3-digit video number from a document title using an Ollama-hosted model.
Any failure (transport, service, unexpected reply) degrades to None.
"""

import logging
import re

from ollama import Client

logger = logging.getLogger(__name__)

NONE_TOKEN = "NONE"
VIDEO_NUMBER_RE = re.compile(r"[0-9]{3}")

PROMPT_TEMPLATE = (
    "提供されたテキストから、最初に現れる連続する3桁の数字を抽出してください。"
    "数字だけを回答し、説明は付けないでください。"
    "もし3桁の数字が見つからない場合は、「" + NONE_TOKEN + "」と回答してください。"
    "テキスト： 「{title}」"
)


def build_prompt(title: str) -> str:
    return PROMPT_TEMPLATE.format(title=title)


def parse_video_number(text: str) -> str | None:
    """Trimmed reply must be exactly three ASCII digits; NONE or anything else → None."""
    reply = (text or "").strip()
    if reply == NONE_TOKEN or not VIDEO_NUMBER_RE.fullmatch(reply):
        return None
    return reply


def make_client(api_key: str | None, host: str | None = None) -> Client:
    """Ollama client; the API key is sent as a bearer token (ollama.com or a proxied server)."""
    headers = {"Authorization": f"Bearer {api_key}"} if api_key else None
    return Client(host=host, headers=headers)


def extract_video_number(
    api_key: str | None,
    title: str,
    *,
    model: str = "gpt-oss:20b",
    host: str | None = None,
    client: Client | None = None,
) -> str | None:
    """
    Ask the model for the first 3-digit run in `title`.
    Returns the number as a string, or None if the model found none or the call failed.
    """
    messages = [{"role": "user", "content": build_prompt(title)}]
    try:
        if client is None:
            client = make_client(api_key, host)
        response = client.chat(model=model, messages=messages)
        raw = (response.get("message") or {}).get("content") or ""
    except Exception as e:
        logger.warning("Video number extraction failed for title %r: %s", title, e)
        return None

    number = parse_video_number(raw)
    if number is None:
        logger.warning("Model did not return a valid 3-digit number. Response: %r", raw.strip())
    return number
