"""Local file I/O utilities."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any | None:
    """Read a JSON document from disk.

    Returns None when the file does not exist or cannot be parsed; a parse
    failure is logged as a warning so callers can start from an empty state.
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read %s, starting from empty state: %s", path, e)
        return None


def write_json_atomic(path: Path, data: Any) -> None:
    """
    Write data as pretty-printed JSON, replacing the target atomically.

    The document is written to a temporary file in the destination directory
    and moved over the target with os.replace, so readers only ever see the
    old or the new file. Raises OSError if the write fails.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
