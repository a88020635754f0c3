"""Helper functions for generate_post CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import parse_date


def parse_generate_post_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for generate_post."""

    parser = argparse.ArgumentParser(description="Generate a post from the news store.")

    # Input options
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--store", default=None, help="Path to the news store JSON file")
    parser.add_argument("--history", default=None, help="Path to the history JSON file")
    parser.add_argument(
        "--date",
        type=lambda v: parse_date(v, "date"),
        default=None,
        help="Publication date (YYYY-MM-DD, default: today in UTC)",
    )

    # Enrichment options
    parser.add_argument(
        "--enrich",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enrich the body through the text-generation service (default: from config)",
    )
    parser.add_argument("--model", default=None, help="Text-generation model to use")

    # Output options
    parser.add_argument("--posts-dir", default=None, help="Directory generated posts are written to")

    return parser.parse_args(argv)
