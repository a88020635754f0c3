"""Topic keyword extraction."""

from __future__ import annotations

import logging
import re
from collections import Counter
from pathlib import Path
from typing import Iterable

from ingest_news.models import Record

logger = logging.getLogger(__name__)

# Latin alphanumeric runs, or runs of hiragana / katakana / kanji / prolonged-sound mark
TOKEN_PATTERN = re.compile(r"[A-Za-z0-9]+|[ぁ-んァ-ヴー一-龠々]+")

SCRIPT_PATTERN = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
STYLE_PATTERN = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
MARKUP_PATTERN = re.compile(r"<[^>]+>")

STOP_WORDS = frozenset({
    # markup
    "html", "head", "body", "meta", "charset", "lang", "id", "class", "title", "script", "style",
    # generic to every page of the site
    "news", "daily", "ai", "jp", "en",
})

FALLBACK_KEYWORDS = (
    "aiニュース",
    "生成ai",
    "最新モデル",
    "企業動向",
    "研究速報",
    "プロダクトレビュー",
    "日本のニュース",
    "マルチモーダル",
    "llm",
    "api統合",
)

MIN_TOKEN_LENGTH = 2
TOP_TOKENS = 8
MAX_KEYWORDS = 12


def corpus_text(records: Iterable[Record]) -> str:
    return " ".join(f"{record.title} {record.summary}" for record in records)


def page_text(html: str) -> str:
    """Visible text of an HTML page: script/style blocks dropped, tags to spaces."""
    text = SCRIPT_PATTERN.sub(" ", html)
    text = STYLE_PATTERN.sub(" ", text)
    return MARKUP_PATTERN.sub(" ", text)


def read_page_text(path: str | Path) -> str:
    path = Path(path)
    try:
        return page_text(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("Failed to read fallback page %s: %s", path, e)
        return ""


def rank_tokens(text: str, stop_words: frozenset[str] = STOP_WORDS) -> list[str]:
    """Tokens ordered by frequency, ties broken by first occurrence."""
    counts: Counter[str] = Counter()
    for token in TOKEN_PATTERN.findall(text or ""):
        if len(token) < MIN_TOKEN_LENGTH:
            continue
        key = token.lower()
        if key in stop_words:
            continue
        counts[key] += 1

    # most_common sorts stably, so equal counts keep insertion order
    return [token for token, _ in counts.most_common()]


def extract_keywords(
    text: str,
    stop_words: frozenset[str] = STOP_WORDS,
    fallback: Iterable[str] = FALLBACK_KEYWORDS,
) -> list[str]:
    """
    Derive up to 12 topic keywords from a text corpus.

    The 8 most frequent corpus tokens come first, followed by the fallback
    vocabulary; duplicates are dropped keeping the first occurrence.
    """
    ranked = rank_tokens(text, stop_words)
    merged = dict.fromkeys([*ranked[:TOP_TOKENS], *fallback])
    return list(merged)[:MAX_KEYWORDS]
