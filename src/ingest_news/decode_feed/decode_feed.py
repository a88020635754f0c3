"""Decode raw syndicated-feed documents into normalized Records."""

from __future__ import annotations

import html
import logging
import re
from datetime import datetime, timezone, timedelta
from typing import Optional
from urllib.parse import urlparse

import feedparser
from dateutil.parser import parse as parse_date

from common.hashing import generate_record_id
from ingest_news.models import Record

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "news.google.com"
DEFAULT_SUMMARY = "要約情報は取得できませんでした。"
DEFAULT_CATEGORY = "ニュース"
DEFAULT_LANG = "EN"

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
    "JST": timezone(timedelta(hours=9)),
}

DEFAULT_ENCODING = "utf-8"
XML_ENCODING_PATTERN = re.compile(rb"""^\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._:-]+)["']""")

ITEM_PATTERN = re.compile(r"<item(?:\s[^>]*)?>(.*?)</item>", re.IGNORECASE | re.DOTALL)
CDATA_PATTERN = re.compile(r"<!\[CDATA\[|\]\]>")
MARKUP_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

ITEM_TAGS = ("title", "link", "description", "pubDate")
TAG_PATTERNS = {
    tag: re.compile(rf"<{tag}(?:\s[^>]*)?>(.*?)</{tag}>", re.IGNORECASE | re.DOTALL)
    for tag in ITEM_TAGS
}


def document_text(document: bytes | str | None) -> str:
    """
    Decode a raw feed document using the charset from its XML declaration.

    Documents without a declaration, or declaring an unknown charset, are
    read as UTF-8. Undecodable bytes are replaced rather than failing the
    whole feed.
    """
    if not document:
        return ""
    if isinstance(document, str):
        return document

    encoding = DEFAULT_ENCODING
    if document.startswith(b"\xef\xbb\xbf"):
        document = document[3:]
    else:
        match = XML_ENCODING_PATTERN.match(document)
        if match:
            encoding = match.group(1).decode("ascii")

    try:
        return document.decode(encoding, errors="replace")
    except LookupError:
        logger.warning("Unknown feed encoding %s, decoding as %s", encoding, DEFAULT_ENCODING)
        return document.decode(DEFAULT_ENCODING, errors="replace")


def decode_text(text: Optional[str]) -> str:
    """Drop CDATA markers, decode character entities and trim."""
    if not text:
        return ""
    text = CDATA_PATTERN.sub("", text)
    return html.unescape(text).strip()


def strip_markup(text: Optional[str]) -> str:
    """Replace markup with spaces, decode entities and collapse whitespace."""
    if not text:
        return ""
    text = decode_text(MARKUP_PATTERN.sub(" ", text))
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def canonicalize_url(link: str) -> str:
    """Remove the query string so the same article always maps to one URL."""
    return link.strip().split("?", 1)[0]


def source_from_url(url: str) -> str:
    """Host name of the URL without a leading www., or the aggregator host."""
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        return DEFAULT_SOURCE

    if not parsed.scheme or not host:
        return DEFAULT_SOURCE
    return host[4:] if host.startswith("www.") else host


def parse_pub_date(value: Optional[str]) -> Optional[str]:
    """Parse a feed date into an ISO calendar date (UTC), or None."""
    if not value:
        return None

    try:
        dt = parse_date(value, tzinfos=TZINFOS)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).date().isoformat()
    except (ValueError, OverflowError):
        return None


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def build_record(
    title: str,
    link: str,
    description: str,
    published: str,
    lang: str,
    category: str,
) -> Record | None:
    """Normalize decoded item fields into a Record; None if title or link is missing."""
    title = (title or "").strip()
    link = (link or "").strip()
    if not title or not link:
        return None

    url = canonicalize_url(link)

    return Record(
        id=generate_record_id(url, title),
        title=title,
        summary=description or DEFAULT_SUMMARY,
        category=category or DEFAULT_CATEGORY,
        lang=lang or DEFAULT_LANG,
        date=parse_pub_date(published) or today_iso(),
        source=source_from_url(url),
        url=url,
    )


class RegexFeedDecoder:
    """Tag-scoped pattern extraction over the <item> blocks of an RSS document."""

    name = "regex"

    def decode(self, document: bytes | str, lang: str, category: str) -> list[Record]:
        records = []
        for match in ITEM_PATTERN.finditer(document_text(document)):
            try:
                record = self._decode_item(match.group(1), lang, category)
            except Exception as e:
                logger.debug("Skipping malformed item: %s", e)
                continue
            if record is not None:
                records.append(record)
        return records

    def _decode_item(self, block: str, lang: str, category: str) -> Record | None:
        return build_record(
            title=_get_tag(block, "title"),
            link=_get_tag(block, "link"),
            description=strip_markup(_get_tag(block, "description")),
            published=_get_tag(block, "pubDate"),
            lang=lang,
            category=category,
        )


class FeedparserFeedDecoder:
    """Standards-compliant parsing through feedparser, same normalization."""

    name = "feedparser"

    def decode(self, document: bytes | str, lang: str, category: str) -> list[Record]:
        # feedparser detects the charset itself when given bytes
        feed = feedparser.parse(document or b"")

        records = []
        for entry in feed.entries:
            try:
                record = build_record(
                    title=entry.get("title", ""),
                    link=entry.get("link", ""),
                    description=strip_markup(entry.get("summary", "")),
                    published=entry.get("published") or entry.get("updated") or "",
                    lang=lang,
                    category=category,
                )
            except Exception as e:
                logger.debug("Skipping malformed entry: %s", e)
                continue
            if record is not None:
                records.append(record)
        return records


DECODERS = {
    RegexFeedDecoder.name: RegexFeedDecoder,
    FeedparserFeedDecoder.name: FeedparserFeedDecoder,
}


def get_decoder(name: str):
    """Instantiate a registered feed decoder by name."""
    if name not in DECODERS:
        raise ValueError(f"Invalid feed decoder: {name}. Must be one of {list(DECODERS.keys())}")
    return DECODERS[name]()


def _get_tag(block: str, tag: str) -> str:
    match = TAG_PATTERNS[tag].search(block)
    return decode_text(match.group(1)) if match else ""
