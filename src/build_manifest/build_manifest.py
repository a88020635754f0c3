"""Build the posts manifest from the generated post files."""

from __future__ import annotations

import html
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from build_manifest.models import PostEntry

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "記事の概要が未設定です。"
URL_PREFIX = "post"

TITLE_PATTERN = re.compile(r"<title>([^<]*)</title>", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(
    r"""<meta[^>]*name=["']description["'][^>]*content=["']([^"']*)["'][^>]*>""",
    re.IGNORECASE,
)


def read_post_entry(path: Path) -> PostEntry:
    """Extract title, description and modification date from one post file."""
    content = path.read_text(encoding="utf-8")

    title_match = TITLE_PATTERN.search(content)
    description_match = DESCRIPTION_PATTERN.search(content)
    modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    return PostEntry(
        slug=path.name,
        title=html.unescape(title_match.group(1).strip()) if title_match else path.stem,
        description=html.unescape(description_match.group(1).strip()) if description_match else DEFAULT_DESCRIPTION,
        date=modified.date().isoformat(),
        url=f"{URL_PREFIX}/{path.name}",
    )


def build_manifest(posts_dir: str | Path) -> list[PostEntry]:
    """Scan the posts directory and return entries, newest first."""
    posts_dir = Path(posts_dir)
    if not posts_dir.is_dir():
        logger.warning("Posts directory %s does not exist", posts_dir)
        return []

    files = sorted(p for p in posts_dir.iterdir() if p.is_file() and p.suffix.lower() == ".html")

    entries = []
    for path in files:
        try:
            entries.append(read_post_entry(path))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable post %s: %s", path, e)
    entries.sort(key=lambda entry: entry.date, reverse=True)

    logger.info("Found %d posts in %s", len(entries), posts_dir)
    return entries
