"""Data models for generate_post pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ingest_news.models import Record


@dataclass
class History:
    """Ordered, duplicate-free set of urls and titles already used as sources."""
    entries: list[str] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = self.entries
        self.entries = []
        for entry in entries:
            self.add(entry)

    def __contains__(self, value: object) -> bool:
        return value in self._seen

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, value: str) -> None:
        if value and value not in self._seen:
            self._seen.add(value)
            self.entries.append(value)

    def mark_used(self, record: Record) -> None:
        """Remember both the url and the title of a consumed record."""
        self.add(record.url)
        self.add(record.title)


@dataclass
class GeneratedDocument:
    """A generated post written to the posts directory."""
    title: str
    description: str
    date: str
    slug: str
    keywords: list[str]
    highlights: list[Record]
    body: str
    enriched: bool
    path: Optional[Path] = None
