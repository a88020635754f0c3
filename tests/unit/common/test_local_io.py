"""Tests for common.local_io module."""

import json
import logging

import pytest

from common.local_io import read_json, write_json_atomic


class TestReadJson:
    def test_missing_file_returns_none(self, tmp_path) -> None:
        assert read_json(tmp_path / "missing.json") is None

    def test_reads_document(self, tmp_path) -> None:
        path = tmp_path / "data.json"
        path.write_text('[{"title": "ニュース"}]', encoding="utf-8")
        assert read_json(path) == [{"title": "ニュース"}]

    def test_corrupt_file_returns_none_and_warns(self, tmp_path, caplog) -> None:
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert read_json(path) is None
        assert "Failed to read" in caplog.text


class TestWriteJsonAtomic:
    def test_writes_pretty_unicode_json(self, tmp_path) -> None:
        path = tmp_path / "data.json"
        write_json_atomic(path, [{"title": "生成AI"}])

        content = path.read_text(encoding="utf-8")
        assert "生成AI" in content
        assert content.endswith("\n")
        assert json.loads(content) == [{"title": "生成AI"}]

    def test_creates_parent_directories(self, tmp_path) -> None:
        path = tmp_path / "nested" / "dir" / "data.json"
        write_json_atomic(path, [])
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_replaces_existing_file_without_leftovers(self, tmp_path) -> None:
        path = tmp_path / "data.json"
        write_json_atomic(path, [1])
        write_json_atomic(path, [2])

        assert json.loads(path.read_text(encoding="utf-8")) == [2]
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_failed_replace_raises_and_cleans_up(self, tmp_path) -> None:
        target = tmp_path / "taken"
        target.mkdir()

        with pytest.raises(OSError):
            write_json_atomic(target, [1])

        assert [p.name for p in tmp_path.iterdir()] == ["taken"]
        assert list(target.iterdir()) == []
