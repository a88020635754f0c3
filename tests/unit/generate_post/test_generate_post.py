"""Tests for generate_post.generate_post module."""

import json
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from common.config import EnrichmentConfig
from generate_post.generate_post import build_context, generate_post
from generate_post.history import HistoryStore
from generate_post.keywords import FALLBACK_KEYWORDS
from ingest_news.models import Record
from ingest_news.record_store import RecordStore

TARGET_DATE = date(2024, 1, 2)
NOW = datetime(2024, 1, 2, 9, 0, 0, tzinfo=timezone.utc)


def make_record(n: int, title: str, summary: str, day: str) -> Record:
    return Record(id=f"n-{n}", title=title, summary=summary, category="Models", lang="EN",
                  date=day, source="ex.com", url=f"https://ex.com/{n}")


RECORDS = [
    make_record(1, "Gemini model release", "Gemini adds agent tools", "2024-01-02"),
    make_record(2, "Robotics lab update", "Gemini powers robots", "2024-01-01"),
    make_record(3, "Chip roadmap", "Faster inference chips", "2023-12-31"),
]


@pytest.fixture
def store(tmp_path) -> RecordStore:
    store = RecordStore(tmp_path / "data" / "news.json")
    store.save(RECORDS)
    return store


@pytest.fixture
def history_store(tmp_path) -> HistoryStore:
    return HistoryStore(tmp_path / "data" / "history.json")


class TestBuildContext:
    def test_selected_first_then_others(self) -> None:
        context = build_context(RECORDS, RECORDS[1], 2)
        assert context == [RECORDS[1], RECORDS[0]]

    def test_without_selection(self) -> None:
        assert build_context(RECORDS, None, 5) == RECORDS


class TestGeneratePost:
    def test_generates_post_from_newest_unused_record(self, tmp_path, store, history_store) -> None:
        document = generate_post(store, history_store, tmp_path / "post", TARGET_DATE, NOW)

        assert document.path.exists()
        assert document.keywords[0] == "gemini"
        assert len(document.keywords) == 12
        assert "「Gemini model release」" in document.body
        assert [r.url for r in document.highlights] == [r.url for r in RECORDS]
        saved = json.loads(history_store.path.read_text(encoding="utf-8"))
        assert saved == ["https://ex.com/1", "Gemini model release"]

    def test_second_run_selects_next_record(self, tmp_path, store, history_store) -> None:
        generate_post(store, history_store, tmp_path / "post", TARGET_DATE, NOW)
        second = generate_post(store, history_store, tmp_path / "post", TARGET_DATE, NOW)

        assert "「Robotics lab update」" in second.body
        assert second.slug.endswith("-1")
        assert len(list((tmp_path / "post").glob("*.html"))) == 2

    def test_highlight_count_limits_listed_records(self, tmp_path, store, history_store) -> None:
        document = generate_post(store, history_store, tmp_path / "post", TARGET_DATE, NOW, highlight_count=1)
        assert document.highlights == [RECORDS[0]]

    def test_empty_store_uses_fallback_page(self, tmp_path, history_store) -> None:
        page = tmp_path / "index.html"
        page.write_text("<html><body><h1>Transformer transformer agents</h1></body></html>", encoding="utf-8")
        empty = RecordStore(tmp_path / "missing.json")

        document = generate_post(empty, history_store, tmp_path / "post", TARGET_DATE, NOW, fallback_page=page)

        assert document.keywords[:2] == ["transformer", "agents"]
        assert document.highlights == []
        assert "直近の注目記事" not in document.path.read_text(encoding="utf-8")
        assert not history_store.path.exists()

    def test_empty_store_and_missing_page(self, tmp_path, history_store) -> None:
        empty = RecordStore(tmp_path / "missing.json")

        document = generate_post(
            empty, history_store, tmp_path / "post", TARGET_DATE, NOW, fallback_page=tmp_path / "nope.html"
        )

        assert document.keywords == list(FALLBACK_KEYWORDS)
        assert document.path.exists()

    @patch("generate_post.generate_post.enrich_body")
    def test_enrichment_disabled_by_default(self, mock_enrich, tmp_path, store, history_store) -> None:
        document = generate_post(store, history_store, tmp_path / "post", TARGET_DATE, NOW)

        mock_enrich.assert_not_called()
        assert document.enriched is False

    @patch("generate_post.generate_post.enrich_body")
    def test_enriched_body_used(self, mock_enrich, tmp_path, store, history_store) -> None:
        mock_enrich.return_value = "<h2>解説</h2><p>本文</p>"
        config = EnrichmentConfig(enabled=True, model="test-model", timeout=5.0, max_tokens=100, context_count=2)

        document = generate_post(store, history_store, tmp_path / "post", TARGET_DATE, NOW, enrichment=config)

        assert document.enriched is True
        assert document.body == "<h2>解説</h2><p>本文</p>"
        args, kwargs = mock_enrich.call_args
        assert args[0] == [RECORDS[0], RECORDS[1]]
        assert args[2] == TARGET_DATE
        assert kwargs == {"model": "test-model", "timeout": 5.0, "max_tokens": 100}

    @patch("generate_post.generate_post.enrich_body")
    def test_failed_enrichment_falls_back(self, mock_enrich, tmp_path, store, history_store) -> None:
        mock_enrich.return_value = None

        document = generate_post(
            store, history_store, tmp_path / "post", TARGET_DATE, NOW, enrichment=EnrichmentConfig()
        )

        assert document.enriched is False
        assert "「Gemini model release」" in document.body

    @patch("generate_post.generate_post.enrich_body")
    def test_disabled_enrichment_config_skips_call(self, mock_enrich, tmp_path, store, history_store) -> None:
        generate_post(
            store, history_store, tmp_path / "post", TARGET_DATE, NOW, enrichment=EnrichmentConfig(enabled=False)
        )
        mock_enrich.assert_not_called()
