"""Optional body enrichment through an external text-generation service."""

from __future__ import annotations

import logging
import os
import re
from datetime import date
from typing import Optional

from openai import OpenAI

from generate_post.instructions import ENRICHMENT_INSTRUCTIONS
from ingest_news.models import Record

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
API_KEY_ENV = "OPENAI_API_KEY"

CODE_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def _format_records_for_prompt(records: list[Record]) -> str:
    """Format context records into a text block for the LLM prompt."""
    lines = []
    for i, record in enumerate(records, 1):
        lines.append(f"Article {i}:")
        lines.append(f"  Title: {record.title}")
        lines.append(f"  Source: {record.source}")
        lines.append(f"  Date: {record.date}")
        if record.summary:
            lines.append(f"  Summary: {record.summary}")
        lines.append("")
    return "\n".join(lines)


def build_enrichment_prompt(records: list[Record], keywords: list[str], target_date: date) -> str:
    parts = [
        f"Target date: {target_date.isoformat()}",
        f"Keywords: {', '.join(keywords)}",
        "",
        _format_records_for_prompt(records) if records else "No articles available.",
    ]
    return "\n".join(parts)


def strip_code_fence(text: str) -> str:
    text = text.strip()
    match = CODE_FENCE_PATTERN.match(text)
    if match:
        text = match.group(1).strip()
    return text


def enrich_body(
    records: list[Record],
    keywords: list[str],
    target_date: date,
    model: str = DEFAULT_MODEL,
    timeout: float = 30.0,
    max_tokens: int = 1500,
    api_key: Optional[str] = None,
) -> Optional[str]:
    """
    Ask the text-generation service for an HTML body fragment.

    Returns None instead of raising when no API key is configured, the
    request fails or times out, or the response is empty. A single request
    is made, with no retries.
    """
    api_key = api_key or os.environ.get(API_KEY_ENV)
    if not api_key:
        logger.info("%s not set, enrichment disabled", API_KEY_ENV)
        return None

    prompt = build_enrichment_prompt(records, keywords, target_date)

    try:
        client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": ENRICHMENT_INSTRUCTIONS},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content
    except Exception as e:
        logger.warning("Enrichment request failed, using fallback body: %s", e)
        return None

    text = strip_code_fence(content or "")
    if not text:
        logger.warning("Enrichment returned empty content, using fallback body")
        return None

    logger.info("Enrichment returned %d characters", len(text))
    return text
