"""Persisted, deduplicated and size-bounded record corpus."""

from __future__ import annotations

import logging
from pathlib import Path

from common.local_io import read_json, write_json_atomic
from common.serialization import serialize_dataclass
from ingest_news.models import Record

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 200


def dedupe_and_merge(existing: list[Record], incoming: list[Record]) -> list[Record]:
    """
    Merge incoming records into the existing ones with insert-if-absent semantics.

    Records are keyed by url (title when there is no url). An incoming record
    is added only when neither its url nor its title is already a key, so an
    existing entry always wins over an incoming duplicate.
    """
    merged: dict[str, Record] = {}
    for record in existing:
        merged.setdefault(record.key, record)

    for record in incoming:
        if record.url and record.url in merged:
            continue
        if record.title and record.title in merged:
            continue
        merged.setdefault(record.key, record)

    return list(merged.values())


def sort_and_limit(records: list[Record], limit: int = DEFAULT_MAX_ITEMS) -> list[Record]:
    """Sort by date descending and keep at most `limit` records."""
    # ISO dates compare chronologically as strings
    ordered = sorted(records, key=lambda r: r.date or "", reverse=True)
    return ordered[:max(limit, 0)]


def merge_records(
    existing: list[Record],
    incoming: list[Record],
    limit: int = DEFAULT_MAX_ITEMS,
) -> list[Record]:
    return sort_and_limit(dedupe_and_merge(existing, incoming), limit)


class RecordStore:
    """JSON-file repository for the record corpus."""

    def __init__(self, path: str | Path, max_items: int = DEFAULT_MAX_ITEMS) -> None:
        self.path = Path(path)
        self.max_items = max_items

    def load(self) -> list[Record]:
        """Read the corpus; a missing or corrupted file yields an empty list."""
        data = read_json(self.path)
        if data is None:
            return []

        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list of records", self.path)
            return []

        records = []
        for entry in data:
            try:
                records.append(Record.from_dict(entry))
            except ValueError as e:
                logger.warning("Dropping malformed record in %s: %s", self.path, e)
        return records

    def save(self, records: list[Record]) -> None:
        """Write the full corpus atomically. Raises OSError on failure."""
        write_json_atomic(self.path, [serialize_dataclass(record) for record in records])
        logger.info("Saved %d records to %s", len(records), self.path)

    def merge(self, existing: list[Record], incoming: list[Record]) -> list[Record]:
        return merge_records(existing, incoming, self.max_items)
