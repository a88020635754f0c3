"""Tests for ingest_news.ingest_news orchestration."""

from unittest.mock import patch

from ingest_news.decode_feed.decode_feed import FeedparserFeedDecoder
from ingest_news.ingest_news import ingest_news
from ingest_news.models import Record
from ingest_news.record_store import RecordStore


def make_record(url: str, date: str) -> Record:
    return Record(
        id=f"id-{url}", title=f"title {url}", summary="S", category="Models",
        lang="EN", date=date, source="ex.com", url=url,
    )


class TestIngestNews:
    @patch("ingest_news.ingest_news.fetch_feeds")
    def test_merges_batch_into_store(self, mock_fetch, tmp_path) -> None:
        store = RecordStore(tmp_path / "news.json")
        store.save([make_record("https://ex.com/old", "2024-01-01")])
        mock_fetch.return_value = [make_record("https://ex.com/new", "2024-01-02")]

        result = ingest_news(["google-ai-ja"], store)

        assert [r.url for r in result] == ["https://ex.com/new", "https://ex.com/old"]
        assert store.load() == result

    @patch("ingest_news.ingest_news.fetch_feeds")
    def test_repeated_ingestion_leaves_store_unchanged(self, mock_fetch, tmp_path) -> None:
        store = RecordStore(tmp_path / "news.json")
        mock_fetch.return_value = [
            make_record("https://ex.com/a", "2024-01-02"),
            make_record("https://ex.com/b", "2024-01-01"),
        ]

        first = ingest_news(["google-ai-ja"], store)
        content = store.path.read_text(encoding="utf-8")
        second = ingest_news(["google-ai-ja"], store)

        assert second == first
        assert store.path.read_text(encoding="utf-8") == content

    @patch("ingest_news.ingest_news.fetch_feeds")
    def test_empty_batch_keeps_existing_records(self, mock_fetch, tmp_path) -> None:
        store = RecordStore(tmp_path / "news.json")
        existing = [make_record("https://ex.com/a", "2024-01-02")]
        store.save(existing)
        mock_fetch.return_value = []

        assert ingest_news(["google-ai-ja"], store) == existing

    @patch("ingest_news.ingest_news.fetch_feeds")
    def test_corrupt_store_is_treated_as_empty(self, mock_fetch, tmp_path) -> None:
        store = RecordStore(tmp_path / "news.json")
        store.path.write_text("not json", encoding="utf-8")
        mock_fetch.return_value = [make_record("https://ex.com/a", "2024-01-02")]

        result = ingest_news(["google-ai-ja"], store)

        assert [r.url for r in result] == ["https://ex.com/a"]

    @patch("ingest_news.ingest_news.fetch_feeds")
    def test_uses_named_decoder(self, mock_fetch, tmp_path) -> None:
        mock_fetch.return_value = []

        ingest_news(["google-ai-ja"], RecordStore(tmp_path / "news.json"), decoder_name="feedparser")

        assert isinstance(mock_fetch.call_args.args[1], FeedparserFeedDecoder)
