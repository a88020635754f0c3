"""CLI for rebuilding the posts manifest."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from build_manifest.build_manifest import build_manifest
from common.cli_helpers import setup_logging
from common.config import load_config
from common.local_io import write_json_atomic
from common.serialization import serialize_dataclass

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Rebuild the posts manifest.")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--posts-dir", default=None, help="Directory holding generated posts")
    parser.add_argument("--output", default=None, help="Path of the manifest JSON file")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    posts_dir = args.posts_dir or config.generate.posts_dir
    output = args.output or config.manifest.path

    entries = build_manifest(posts_dir)

    try:
        write_json_atomic(output, [serialize_dataclass(entry) for entry in entries])
    except OSError:
        logger.exception("Failed to write manifest to %s", output)
        sys.exit(1)

    logger.info("posts.json updated with %d entries", len(entries))


if __name__ == "__main__":
    main()
