"""Generate one post from the record store."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from common.config import EnrichmentConfig
from generate_post.assemble import ArticleAssembler
from generate_post.enrichment import enrich_body
from generate_post.history import HistoryStore
from generate_post.keywords import corpus_text, extract_keywords, read_page_text
from generate_post.models import GeneratedDocument
from generate_post.selector import select_record
from ingest_news.models import Record
from ingest_news.record_store import RecordStore

logger = logging.getLogger(__name__)


def build_context(records: list[Record], selected: Optional[Record], count: int) -> list[Record]:
    """Selected record first, then the most recent others, at most `count`."""
    context = [selected] if selected is not None else []
    context.extend(record for record in records if record is not selected)
    return context[:count]


def generate_post(
    store: RecordStore,
    history_store: HistoryStore,
    posts_dir: str | Path,
    target_date: date,
    now: datetime,
    fallback_page: str | Path = "index.html",
    highlight_count: int = 5,
    enrichment: Optional[EnrichmentConfig] = None,
) -> GeneratedDocument:
    """
    Run the generation pipeline: select, extract keywords, enrich, assemble.

    An empty corpus still produces a keyword-only post. Enrichment is skipped
    when `enrichment` is None or disabled.
    """
    records = store.load()
    history = history_store.load()
    logger.info("Loaded %d records and %d history entries", len(records), len(history))

    record = select_record(records, history)
    if record is None:
        logger.warning("No record available, generating keyword-only post")
    else:
        logger.info("Selected record: %s", record.title)

    text = corpus_text(records)
    if not text.strip():
        logger.info("Record store empty, extracting keywords from %s", fallback_page)
        text = read_page_text(fallback_page)
    keywords = extract_keywords(text)
    logger.info("Keywords: %s", ", ".join(keywords))

    body = None
    if enrichment is not None and enrichment.enabled:
        body = enrich_body(
            build_context(records, record, enrichment.context_count),
            keywords,
            target_date,
            model=enrichment.model,
            timeout=enrichment.timeout,
            max_tokens=enrichment.max_tokens,
        )

    assembler = ArticleAssembler(posts_dir, history_store)
    return assembler.assemble(
        keywords=keywords,
        record=record,
        highlights=records[:highlight_count],
        enrichment=body,
        history=history,
        target_date=target_date,
        now=now,
    )
