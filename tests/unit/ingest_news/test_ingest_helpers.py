"""Tests for ingest_news.helpers module."""

from unittest.mock import patch

import pytest

from ingest_news.helpers import parse_ingest_news_args, parse_sources

TEST_FEEDS = {"bbc": "url1", "cnn": "url2", "fox": "url3"}


@patch("ingest_news.helpers.FEEDS", TEST_FEEDS)
class TestParseSources:
    def test_none_returns_all_sources(self) -> None:
        assert set(parse_sources(None)) == {"bbc", "cnn", "fox"}

    def test_none_uses_configured_default(self) -> None:
        assert parse_sources(None, default=["cnn"]) == ["cnn"]

    def test_all_string_ignores_default(self) -> None:
        assert set(parse_sources("all", default=["cnn"])) == {"bbc", "cnn", "fox"}

    def test_valid_comma_separated(self) -> None:
        assert parse_sources("bbc, cnn") == ["bbc", "cnn"]

    def test_invalid_sources_are_dropped(self) -> None:
        assert parse_sources("bbc,unknown") == ["bbc"]

    def test_only_invalid_sources_raise_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_sources("invalid_source")


class TestParseIngestNewsArgs:
    def test_defaults(self) -> None:
        args = parse_ingest_news_args([])
        assert args.config is None
        assert args.sources is None
        assert args.max_items is None
        assert args.decoder is None

    def test_overrides(self) -> None:
        args = parse_ingest_news_args(["--store", "s.json", "--max-items", "50", "--decoder", "feedparser"])
        assert args.store == "s.json"
        assert args.max_items == 50
        assert args.decoder == "feedparser"

    def test_unknown_decoder_is_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_ingest_news_args(["--decoder", "xml"])
        assert exc_info.value.code == 2
