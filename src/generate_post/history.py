"""Persisted history of records already used for generation."""

from __future__ import annotations

import logging
from pathlib import Path

from common.local_io import read_json, write_json_atomic
from generate_post.models import History

logger = logging.getLogger(__name__)


class HistoryStore:
    """JSON-file repository for the generation history."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> History:
        data = read_json(self.path)
        if data is None:
            return History()

        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list of strings", self.path)
            return History()

        return History([entry for entry in data if isinstance(entry, str)])

    def save(self, history: History) -> None:
        """Write the full history atomically. Raises OSError on failure."""
        write_json_atomic(self.path, list(history.entries))
        logger.info("Saved %d history entries to %s", len(history), self.path)
