"""Ingest feed items into the persisted record store."""

import logging

from ingest_news.decode_feed.decode_feed import get_decoder
from ingest_news.fetch_feeds.fetch_feeds import fetch_feeds
from ingest_news.models import Record
from ingest_news.record_store import RecordStore

logger = logging.getLogger(__name__)


def ingest_news(
    sources: list[str],
    store: RecordStore,
    decoder_name: str = "regex",
    timeout: int = 30,
    max_workers: int = 4,
) -> list[Record]:
    """Fetch all sources, merge the batch into the store and persist it."""
    logger.info("Ingesting news from %d sources", len(sources))

    current = store.load()
    logger.info("Loaded %d existing records from %s", len(current), store.path)

    # Every fetch settles before the merge runs
    decoder = get_decoder(decoder_name)
    incoming = fetch_feeds(sources, decoder, timeout=timeout, max_workers=max_workers)
    if not incoming:
        logger.warning("0 items fetched")

    merged = store.merge(current, incoming)
    added = len({r.key for r in merged} - {r.key for r in current})
    logger.info("%d new records merged, store holds %d", added, len(merged))

    store.save(merged)
    return merged
