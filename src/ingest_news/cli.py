"""CLI for ingesting feed items into the news store."""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from ingest_news.helpers import parse_ingest_news_args, parse_sources
from ingest_news.ingest_news import ingest_news
from ingest_news.record_store import RecordStore

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_ingest_news_args(argv)
    config = load_config(args.config)

    sources = parse_sources(args.sources, default=config.ingest.sources)
    store = RecordStore(
        args.store or config.store.path,
        max_items=args.max_items if args.max_items is not None else config.store.max_items,
    )

    try:
        records = ingest_news(
            sources=sources,
            store=store,
            decoder_name=args.decoder or config.ingest.decoder,
            timeout=config.ingest.request_timeout,
            max_workers=config.ingest.max_workers,
        )
    except OSError:
        logger.exception("Failed to persist news store to %s", store.path)
        sys.exit(1)

    logger.info("news store updated: %d items", len(records))


if __name__ == "__main__":
    main()
