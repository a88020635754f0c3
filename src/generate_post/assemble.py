"""Assemble, write and record a generated post."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from generate_post.history import HistoryStore
from generate_post.models import GeneratedDocument, History
from ingest_news.models import Record

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DOCUMENT_TEMPLATE = "post.html.jinja2"
FALLBACK_BODY_TEMPLATE = "fallback_body.html.jinja2"

SITE_NAME = "Daily AI News"
SLUG_PREFIX = "daily-ai-news"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def build_title(target_date: date) -> str:
    return f"{SITE_NAME} トレンド解説 - {target_date.isoformat()}"


def build_description(keywords: list[str]) -> str:
    return f"{' / '.join(keywords[:5])} にフォーカスした自動生成ブログ。"


def slugify(value: str) -> str:
    """Lowercase, collapse anything outside [a-z0-9] to single hyphens."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "post"


def build_slug_base(target_date: date, now: datetime) -> str:
    """Timestamped base name so repeated same-day runs get distinct names."""
    return slugify(f"{SLUG_PREFIX}-{target_date:%Y%m%d}-{now:%H%M%S}")


def render_fallback_body(keywords: list[str], record: Optional[Record]) -> str:
    """Deterministic body built from the keywords and the selected record's title."""
    return env.get_template(FALLBACK_BODY_TEMPLATE).render(keywords=keywords, record=record).strip()


def render_document(
    title: str,
    description: str,
    date_string: str,
    keywords: list[str],
    highlights: list[Record],
    body: str,
) -> str:
    html = env.get_template(DOCUMENT_TEMPLATE).render(
        title=title,
        description=description,
        date=date_string,
        keywords=keywords,
        highlights=highlights,
        body=body,
    )
    return html.strip() + "\n"


def write_unique(posts_dir: Path, base_name: str, content: str) -> Path:
    """
    Write content to <base_name>.html, or <base_name>-N.html if taken.

    Files are created exclusively, so a name that already exists on disk is
    never overwritten even when another run claims it at the same moment.
    Raises OSError if the document cannot be written.
    """
    posts_dir.mkdir(parents=True, exist_ok=True)

    name = base_name
    counter = 1
    while True:
        path = posts_dir / f"{name}.html"
        try:
            f = path.open("x", encoding="utf-8")
        except FileExistsError:
            name = f"{base_name}-{counter}"
            counter += 1
            continue

        try:
            with f:
                f.write(content)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        return path


class ArticleAssembler:
    """Composes a post, writes it to a unique slot and records its source in the history."""

    def __init__(self, posts_dir: str | Path, history_store: HistoryStore) -> None:
        self.posts_dir = Path(posts_dir)
        self.history_store = history_store

    def assemble(
        self,
        keywords: list[str],
        record: Optional[Record],
        highlights: list[Record],
        enrichment: Optional[str],
        history: History,
        target_date: date,
        now: datetime,
    ) -> GeneratedDocument:
        """
        Build and write the post for one generation run.

        Args:
            keywords: Ranked topic keywords
            record: Selected source record, or None for an empty corpus
            highlights: Recent records listed in the post; empty omits the section
            enrichment: Enriched body fragment, or None to use the fallback body
            history: Generation history, updated in place when a record is consumed
            target_date: Publication date of the post
            now: Current time, used for the timestamped slug

        Returns:
            The written GeneratedDocument
        """
        enriched = bool(enrichment and enrichment.strip())
        body = enrichment if enriched else render_fallback_body(keywords, record)

        title = build_title(target_date)
        description = build_description(keywords)
        date_string = target_date.isoformat()

        content = render_document(title, description, date_string, keywords, highlights, body)
        path = write_unique(self.posts_dir, build_slug_base(target_date, now), content)
        logger.info("Post generated: %s (%s body)", path, "enriched" if enriched else "fallback")

        if record is not None:
            history.mark_used(record)
            self.history_store.save(history)

        return GeneratedDocument(
            title=title,
            description=description,
            date=date_string,
            slug=path.stem,
            keywords=list(keywords),
            highlights=list(highlights),
            body=body,
            enriched=enriched,
            path=path,
        )
