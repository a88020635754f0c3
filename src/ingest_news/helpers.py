"""Helper functions for ingest_news CLI."""

from __future__ import annotations

import argparse
import logging

from ingest_news.decode_feed.decode_feed import DECODERS
from ingest_news.fetch_feeds.sources import FEEDS

logger = logging.getLogger(__name__)


def parse_sources(value: str | None, default: list[str] | None = None) -> list[str]:
    '''Parse the --sources argument into a list of sources.'''

    # "all" selects the whole catalogue
    if value and value.strip().lower() == "all":
        return list(FEEDS.keys())

    # No value: configured sources, or the whole catalogue when none are configured
    if not value:
        if not default:
            return list(FEEDS.keys())
        value = ",".join(default)

    # Parse comma-separated sources, keeping only valid ones
    valid_sources = set(FEEDS.keys())
    parsed = [s.strip() for s in value.split(",") if s.strip() and s.strip().lower() != "all"]

    # Log any invalid sources
    for source in parsed:
        if source not in valid_sources:
            logger.warning("Invalid source: %s", source)

    sources = [s for s in parsed if s in valid_sources]

    # Raise an error if no valid sources were provided
    if not sources:
        raise ValueError(f"No valid sources provided. Valid sources: {', '.join(sorted(valid_sources))}")

    return sources


def parse_ingest_news_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for ingest_news.'''

    parser = argparse.ArgumentParser(description="Fetch feeds and merge them into the news store.")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--sources",
        default=None,
        help="Comma-separated list of sources (default: configured sources, 'all' for every source).",
    )
    parser.add_argument("--store", default=None, help="Path to the news store JSON file")
    parser.add_argument("--max-items", type=int, default=None, help="Maximum records kept in the store")
    parser.add_argument(
        "--decoder",
        default=None,
        choices=list(DECODERS),
        help="Feed decoder to use (default: from config)",
    )
    return parser.parse_args(argv)
