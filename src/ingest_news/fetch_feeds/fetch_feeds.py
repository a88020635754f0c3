"""Concurrent feed fetching."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests

from ingest_news.fetch_feeds.sources import FEEDS
from ingest_news.models import FeedSource, Record

logger = logging.getLogger(__name__)

USER_AGENT = "daily-ai-news/1.0 (RSS reader)"


def fetch_feed_document(feed: FeedSource, timeout: int = 30) -> bytes:
    """
    Fetch one feed document as raw bytes, raising on network errors or non-success status.

    The body is left undecoded; the feed decoder reads the charset from the
    XML declaration.
    """
    response = requests.get(
        feed.url,
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    )
    response.raise_for_status()
    return response.content


def fetch_feed_records(feed: FeedSource, decoder, timeout: int = 30) -> list[Record]:
    """Fetch and decode a single feed."""
    document = fetch_feed_document(feed, timeout=timeout)
    return decoder.decode(document, feed.lang, feed.category)


def fetch_feeds(
    sources: list[str],
    decoder,
    timeout: int = 30,
    max_workers: int = 4,
) -> list[Record]:
    """
    Fetch all sources with overlapping requests and reduce them into one batch.

    A failing source is logged and skipped; the others still contribute.
    The batch is returned only after every request has settled, in the
    order the sources were given.

    Args:
        sources: Feed names from the FEEDS catalogue
        decoder: Feed decoder instance used for every document
        timeout: Per-request timeout in seconds
        max_workers: Maximum number of in-flight requests

    Returns:
        Records decoded from every source that could be fetched
    """
    feeds = []
    for source in sources:
        feed = FEEDS.get(source)
        if feed is None:
            logger.warning("Unknown source: %s", source)
            continue
        feeds.append(feed)

    if not feeds:
        return []

    results: dict[str, list[Record]] = {}
    with ThreadPoolExecutor(max_workers=min(max_workers, len(feeds)) or 1) as executor:
        futures = {
            executor.submit(fetch_feed_records, feed, decoder, timeout): feed
            for feed in feeds
        }
        for future in as_completed(futures):
            feed = futures[future]
            try:
                records = future.result()
            except Exception as e:
                logger.error("Failed to fetch feed %s (%s): %s", feed.name, feed.url, e)
                continue
            logger.info("Found %d items from %s", len(records), feed.name)
            results[feed.name] = records

    batch = []
    for feed in feeds:
        batch.extend(results.get(feed.name, []))

    logger.info("Total items collected: %d", len(batch))
    return batch
