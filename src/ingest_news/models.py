"""Data models for ingest_news pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FeedSource:
    """A configured syndicated feed endpoint."""
    name: str
    url: str
    lang: str
    category: str


@dataclass(frozen=True)
class Record:
    """One normalized news item decoded from a feed."""
    id: str
    title: str
    summary: str
    category: str
    lang: str
    date: str
    source: str
    url: str

    @property
    def key(self) -> str:
        """Dedup key: the URL, or the title when the record has no URL."""
        return self.url or self.title

    @classmethod
    def from_dict(cls, data: Any) -> Record:
        """Build a Record from a persisted dict, raising ValueError if unusable."""
        if not isinstance(data, dict):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")

        title = str(data.get("title") or "")
        url = str(data.get("url") or "")
        if not title and not url:
            raise ValueError("Record has neither url nor title")

        return cls(
            id=str(data.get("id") or ""),
            title=title,
            summary=str(data.get("summary") or ""),
            category=str(data.get("category") or ""),
            lang=str(data.get("lang") or ""),
            date=str(data.get("date") or ""),
            source=str(data.get("source") or ""),
            url=url,
        )
