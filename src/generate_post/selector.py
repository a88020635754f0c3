"""Selection of the next source record for generation."""

from __future__ import annotations

from typing import Optional

from generate_post.models import History
from ingest_news.models import Record


def select_record(records: list[Record], history: History) -> Optional[Record]:
    """
    Pick the most recent record not yet used as a generation source.

    Records are checked by url (title for url-less records) first, then by
    title; when everything has been used the newest record is reused.
    Returns None only for an empty store.
    """
    for record in records:
        if record.key not in history:
            return record

    for record in records:
        if record.title not in history:
            return record

    return records[0] if records else None
