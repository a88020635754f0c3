"""CLI for generating a post from the news store."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from datetime import datetime, timezone

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from generate_post.generate_post import generate_post
from generate_post.helpers import parse_generate_post_args
from generate_post.history import HistoryStore
from ingest_news.record_store import RecordStore

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_generate_post_args(argv)
    config = load_config(args.config)

    enrichment = config.enrichment
    if args.enrich is not None:
        enrichment = replace(enrichment, enabled=args.enrich)
    if args.model:
        enrichment = replace(enrichment, model=args.model)

    now = datetime.now(timezone.utc)
    target_date = args.date or now.date()

    store = RecordStore(args.store or config.store.path, max_items=config.store.max_items)
    history_store = HistoryStore(args.history or config.history.path)

    try:
        document = generate_post(
            store=store,
            history_store=history_store,
            posts_dir=args.posts_dir or config.generate.posts_dir,
            target_date=target_date,
            now=now,
            fallback_page=config.generate.fallback_page,
            highlight_count=config.generate.highlight_count,
            enrichment=enrichment,
        )
    except OSError:
        logger.exception("Failed to write post or history")
        sys.exit(1)

    logger.info("Blog generated: %s", document.path)


if __name__ == "__main__":
    main()
